"""
CoinMarketCap client that fetches the latest listings for the gateway.
"""

import logging
from dataclasses import dataclass
from typing import Any, Final

import aiohttp
from pydantic import ValidationError

from ..shared.constants import API_START_POSITION, MAX_CRYPTO_ASSETS, QUOTE_CURRENCY
from ..shared.models import ApiStatus, Asset
from .settings import gateway_settings

LISTINGS_PATH: Final[str] = "/v1/cryptocurrency/listings/latest"
API_KEY_HEADER: Final[str] = "X-CMC_PRO_API_KEY"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingsOk:
    """Successfully parsed listings."""

    assets: list[Asset]
    status: ApiStatus


@dataclass(frozen=True)
class ListingsError:
    """Failed fetch or parse, with a diagnostic for the server log."""

    details: str


ListingsResult = ListingsOk | ListingsError


def parse_listings(payload: Any, limit: int = MAX_CRYPTO_ASSETS) -> ListingsResult:
    """
    Validate a raw provider payload and keep the first ``limit`` assets.

    Args:
        payload: Decoded JSON body from the provider
        limit: Maximum number of assets to keep, in provider order

    Returns:
        ListingsOk with the truncated snapshot, or ListingsError describing
        why the payload was rejected
    """
    match payload:
        case {"data": list(data), "status": dict(status)}:
            pass
        case _:
            return ListingsError(
                details="Unexpected payload shape, expected {data: array, status: object}"
            )

    try:
        assets = [Asset.model_validate(item) for item in data[:limit]]
        api_status = ApiStatus.model_validate(status)
    except ValidationError as e:
        return ListingsError(details=f"Malformed listings payload: {e}")

    seen: set[int] = set()
    for asset in assets:
        if asset.id in seen:
            return ListingsError(details=f"Duplicate asset id {asset.id} in listings")
        seen.add(asset.id)

    return ListingsOk(assets=assets, status=api_status)


class CoinMarketCapClient:
    """Single-shot client for the CoinMarketCap listings endpoint."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        limit: int = MAX_CRYPTO_ASSETS,
        start: int = API_START_POSITION,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = (base_url or gateway_settings.coinmarketcap_url).rstrip("/")
        self.limit = limit
        self.start = start
        self.timeout = timeout or gateway_settings.upstream_timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def fetch_listings(self) -> ListingsResult:
        """
        Fetch the top assets from CoinMarketCap.

        Exactly one request is made per call and nothing is retried. A missing
        API key is reported before any network traffic happens.
        """
        if not self.is_configured:
            return ListingsError(details="COINMARKETCAP_API_KEY is not configured")

        url = f"{self.base_url}{LISTINGS_PATH}"
        params = {
            "start": str(self.start),
            "limit": str(self.limit),
            "convert": QUOTE_CURRENCY,
        }
        headers = {API_KEY_HEADER: self.api_key, "Accept": "application/json"}

        try:
            async with (
                aiohttp.ClientSession() as session,
                session.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response,
            ):
                if response.status != 200:
                    return ListingsError(
                        details=f"CoinMarketCap API error: {response.status}"
                    )
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            return ListingsError(details=f"CoinMarketCap request failed: {e!r}")

        result = parse_listings(payload, self.limit)
        if isinstance(result, ListingsOk):
            logger.debug(f"Fetched {len(result.assets)} assets from CoinMarketCap")
        return result
