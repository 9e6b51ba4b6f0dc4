"""
Tests for asset sorting.
"""

from itertools import permutations

import pytest

from conftest import make_asset
from crypto_dashboard.dashboard.sorting import next_sort, sort_assets


class TestSortAssets:
    """Test cases for the sorter."""

    def test_does_not_mutate_input(self, sample_assets):
        """Test that the snapshot order is left alone."""
        original = list(sample_assets)

        result = sort_assets(sample_assets, "price", "desc")

        assert sample_assets == original
        assert result is not sample_assets

    @pytest.mark.parametrize(
        "key,direction,expected",
        [
            ("name", "asc", ["BTC", "BNB", "ADA", "ETH", "USDT"]),
            ("name", "desc", ["USDT", "ETH", "ADA", "BNB", "BTC"]),
            ("symbol", "asc", ["ADA", "BNB", "BTC", "ETH", "USDT"]),
            ("symbol", "desc", ["USDT", "ETH", "BTC", "BNB", "ADA"]),
            ("price", "desc", ["BTC", "ETH", "BNB", "USDT", "ADA"]),
        ],
    )
    def test_sort_keys(self, sample_assets, key, direction, expected):
        """Test each key in both directions."""
        result = sort_assets(sample_assets, key, direction)
        assert [asset.symbol for asset in result] == expected

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    def test_no_key_defaults_to_name_ascending(self, sample_assets, direction):
        """Test the default ordering ignores direction."""
        result = sort_assets(sample_assets, None, direction)
        assert [asset.name for asset in result] == [
            "Bitcoin",
            "BNB",
            "Cardano",
            "Ethereum",
            "Tether",
        ]

    def test_name_comparison_ignores_case(self):
        """Test that lower-case names are not pushed after upper-case ones."""
        assets = [
            make_asset(1, "zcash", "ZEC", 1.0),
            make_asset(2, "Algorand", "ALGO", 1.0),
            make_asset(3, "bitcoin", "BTC", 1.0),
        ]

        result = sort_assets(assets, "name", "asc")

        assert [asset.name for asset in result] == ["Algorand", "bitcoin", "zcash"]

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    def test_ties_keep_snapshot_order(self, direction):
        """Test stability for equal keys in both directions."""
        assets = [
            make_asset(1, "First", "AAA", 1.0),
            make_asset(2, "Second", "BBB", 5.0),
            make_asset(3, "Third", "CCC", 1.0),
            make_asset(4, "Fourth", "DDD", 5.0),
            make_asset(5, "Fifth", "EEE", 1.0),
        ]

        result = sort_assets(assets, "price", direction)

        ones = [asset.id for asset in result if asset.price_usd == 1.0]
        fives = [asset.id for asset in result if asset.price_usd == 5.0]
        assert ones == [1, 3, 5]
        assert fives == [2, 4]

    def test_price_order_for_all_permutations(self):
        """Test price ordering is monotonic whatever the input order."""
        assets = [
            make_asset(1, "A", "A", 3.5),
            make_asset(2, "B", "B", 0.0),
            make_asset(3, "C", "C", 1200.0),
            make_asset(4, "D", "D", 3.5),
            make_asset(5, "E", "E", 0.25),
        ]

        for ordering in permutations(assets):
            ascending = [a.price_usd for a in sort_assets(ordering, "price", "asc")]
            descending = [a.price_usd for a in sort_assets(ordering, "price", "desc")]
            assert ascending == sorted(ascending)
            assert descending == sorted(descending, reverse=True)

    @pytest.mark.parametrize(
        "key,direction", [("rank", "asc"), ("price", "up")]
    )
    def test_rejects_unknown_options(self, sample_assets, key, direction):
        """Test invalid keys and directions."""
        with pytest.raises(ValueError):
            sort_assets(sample_assets, key, direction)


class TestNextSort:
    """Test cases for header click handling."""

    @pytest.mark.parametrize(
        "current_key,current_direction,clicked,expected",
        [
            (None, "asc", "price", ("price", "asc")),
            ("price", "asc", "price", ("price", "desc")),
            ("price", "desc", "price", ("price", "asc")),
            ("price", "desc", "name", ("name", "asc")),
        ],
    )
    def test_next_sort(self, current_key, current_direction, clicked, expected):
        """Test toggling and switching columns."""
        assert next_sort(current_key, current_direction, clicked) == expected
