"""
Test configuration for the crypto dashboard tests.
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# Add project root to path before importing our modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Import our modules after path setup
from crypto_dashboard.shared.models import Asset  # noqa: E402


def asset_payload(
    asset_id: int, name: str, symbol: str, price: float, rank: int | None = None
) -> dict:
    """Build an asset entry shaped like a CoinMarketCap listing."""
    return {
        "id": asset_id,
        "name": name,
        "symbol": symbol,
        "slug": name.lower().replace(" ", "-"),
        "cmc_rank": rank or asset_id,
        "quote": {"USD": {"price": price, "volume_24h": 1000.0}},
    }


def make_asset(
    asset_id: int, name: str, symbol: str, price: float, rank: int | None = None
) -> Asset:
    return Asset.model_validate(asset_payload(asset_id, name, symbol, price, rank))


class FakeSource:
    """Asset source returning queued results; exceptions in the queue are raised."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def fetch_assets(self):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def sample_assets():
    """Provide a small snapshot in rank order."""
    return [
        make_asset(1, "Bitcoin", "BTC", 45000.0),
        make_asset(1027, "Ethereum", "ETH", 3000.0, rank=2),
        make_asset(825, "Tether", "USDT", 1.0, rank=3),
        make_asset(1839, "BNB", "BNB", 400.0, rank=4),
        make_asset(2010, "Cardano", "ADA", 1.0, rank=5),
    ]


@pytest.fixture
def listings_payload():
    """Provide a provider payload with 50 assets."""
    return {
        "status": {
            "timestamp": "2024-01-01T12:00:00.000Z",
            "error_code": 0,
            "error_message": None,
            "credit_count": 1,
        },
        "data": [
            asset_payload(i, f"Coin {i}", f"C{i}", 100.0 - i) for i in range(1, 51)
        ],
    }


class StubServer:
    """Local HTTP server that records requests and answers with a canned reply."""

    def __init__(self):
        self.status = 200
        self.body: object = {}
        self.requests: list[web.Request] = []
        self.server: TestServer | None = None

    @property
    def url(self) -> str:
        return f"http://{self.server.host}:{self.server.port}"

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        if isinstance(self.body, str):
            return web.Response(status=self.status, text=self.body)
        return web.json_response(self.body, status=self.status)


@pytest_asyncio.fixture
async def stub_server():
    """Run a stub HTTP server for the duration of a test."""
    stub = StubServer()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", stub.handle)
    async with TestServer(app) as server:
        stub.server = server
        yield stub
