"""
Ordering of asset snapshots for display.
"""

import locale
from collections.abc import Callable, Sequence
from functools import cmp_to_key
from typing import Literal

from ..shared.constants import SORT_ASC, SORT_DESC
from ..shared.models import Asset

SortKey = Literal["name", "symbol", "price"]
SortDirection = Literal["asc", "desc"]

SORT_KEYS: tuple[SortKey, ...] = ("name", "symbol", "price")


def compare_text(left: str, right: str) -> int:
    """Locale-aware comparison, ignoring case unless the texts differ only by case."""
    return locale.strcoll(left.casefold(), right.casefold()) or locale.strcoll(
        left, right
    )


def _compare_numbers(left: float, right: float) -> int:
    return (left > right) - (left < right)


_COMPARATORS: dict[SortKey, Callable[[Asset, Asset], int]] = {
    "name": lambda a, b: compare_text(a.name, b.name),
    "symbol": lambda a, b: compare_text(a.symbol, b.symbol),
    "price": lambda a, b: _compare_numbers(a.price_usd, b.price_usd),
}


def sort_assets(
    assets: Sequence[Asset],
    key: SortKey | None = None,
    direction: SortDirection = SORT_ASC,
) -> list[Asset]:
    """
    Return a new, stably sorted list of assets.

    Args:
        assets: Snapshot to order, left untouched
        key: Field to sort by. ``None`` means the default ordering,
            ascending by name, whatever the direction
        direction: ``asc`` or ``desc``. Descending negates the comparator, so
            ties keep their snapshot order in both directions

    Raises:
        ValueError: For an unknown key or direction
    """
    if key is None:
        key, direction = "name", SORT_ASC
    if key not in _COMPARATORS:
        raise ValueError(f"Unknown sort key: {key}")
    if direction not in (SORT_ASC, SORT_DESC):
        raise ValueError(f"Unknown sort direction: {direction}")

    compare = _COMPARATORS[key]
    sign = -1 if direction == SORT_DESC else 1
    return sorted(assets, key=cmp_to_key(lambda a, b: sign * compare(a, b)))


def next_sort(
    current_key: SortKey | None,
    current_direction: SortDirection,
    clicked: SortKey,
) -> tuple[SortKey, SortDirection]:
    """Sort state after a column header click: same column toggles, new column starts ascending."""
    if current_key == clicked:
        return clicked, SORT_DESC if current_direction == SORT_ASC else SORT_ASC
    return clicked, SORT_ASC
