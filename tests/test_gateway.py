"""
Tests for the gateway API endpoints.
"""

from fastapi.testclient import TestClient

from crypto_dashboard.gateway.service import app, get_listings_client
from crypto_dashboard.gateway.upstream import (
    CoinMarketCapClient,
    ListingsError,
    parse_listings,
)


class StubListingsClient:
    """Listings client returning a fixed result."""

    def __init__(self, result=None, exc: Exception | None = None):
        self.result = result
        self.exc = exc
        self.calls = 0

    async def fetch_listings(self):
        self.calls += 1
        if self.exc is not None:
            raise self.exc
        return self.result


class TestGatewayAPI:
    """Test cases for the gateway endpoints."""

    def setup_method(self):
        """Set up test client."""
        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def use_client(self, stub) -> None:
        app.dependency_overrides[get_listings_client] = lambda: stub

    def test_health_check(self):
        """Test the health check endpoint."""
        response = self.client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_get_crypto_success(self, listings_payload):
        """Test that a good upstream answer is republished with cache headers."""
        stub = StubListingsClient(parse_listings(listings_payload, limit=10))
        self.use_client(stub)

        response = self.client.get("/api/crypto")

        assert response.status_code == 200
        assert stub.calls == 1
        body = response.json()
        assert [asset["id"] for asset in body["data"]] == list(range(1, 11))
        assert body["data"][0]["quote"]["USD"]["price"] == 99.0
        assert body["status"]["error_code"] == 0
        cache_control = response.headers["cache-control"]
        assert "s-maxage=60" in cache_control
        assert "stale-while-revalidate" in cache_control

    def test_get_crypto_upstream_error(self):
        """Test that an upstream failure becomes a 500 envelope."""
        self.use_client(StubListingsClient(ListingsError("CoinMarketCap API error: 401")))

        response = self.client.get("/api/crypto")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to fetch cryptocurrency data"
        assert body["details"] == "CoinMarketCap API error: 401"
        assert "cache-control" not in response.headers

    def test_get_crypto_missing_key(self):
        """Test that a missing API key is a 500 without an outbound call."""
        self.use_client(CoinMarketCapClient(api_key=None, base_url="http://127.0.0.1:9"))

        response = self.client.get("/api/crypto")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to fetch cryptocurrency data"
        assert "COINMARKETCAP_API_KEY" in body["details"]

    def test_get_crypto_unexpected_exception(self):
        """Test that an unexpected exception never leaks to the client."""
        self.use_client(StubListingsClient(exc=RuntimeError("boom")))

        response = self.client.get("/api/crypto")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to fetch cryptocurrency data",
            "details": "boom",
        }

    def test_options_advertises_get_only(self):
        """Test the plain OPTIONS response."""
        response = self.client.options("/api/crypto")

        assert response.status_code == 200
        assert response.headers["access-control-allow-methods"] == "GET"

    def test_cors_preflight(self):
        """Test a browser preflight is answered with GET allowed."""
        response = self.client.options(
            "/api/crypto",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert "GET" in response.headers["access-control-allow-methods"]
        assert "POST" not in response.headers["access-control-allow-methods"]

    def test_post_not_allowed(self):
        """Test that only reads are exposed."""
        response = self.client.post("/api/crypto")
        assert response.status_code == 405

    def test_404_endpoint(self):
        """Test non-existent endpoint."""
        response = self.client.get("/nonexistent")
        assert response.status_code == 404
        assert response.json()["error"] == "Endpoint not found"
