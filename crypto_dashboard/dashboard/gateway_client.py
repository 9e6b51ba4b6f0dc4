"""
HTTP client used by the dashboard to read the gateway's crypto endpoint.
"""

import logging
from typing import Final

import aiohttp
from pydantic import ValidationError

from ..shared.models import Asset
from .settings import dashboard_settings

CRYPTO_PATH: Final[str] = "/api/crypto"

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Raised when the gateway cannot provide a usable snapshot."""


class GatewayClient:
    """Reads the current asset snapshot from the gateway."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or dashboard_settings.gateway_url).rstrip("/")
        self.timeout = timeout or dashboard_settings.gateway_timeout

    async def fetch_assets(self) -> list[Asset]:
        """
        Fetch the asset snapshot.

        Raises:
            GatewayError: On a non-200 response or a malformed envelope
            aiohttp.ClientError: When the gateway is unreachable
        """
        url = f"{self.base_url}{CRYPTO_PATH}"

        async with (
            aiohttp.ClientSession() as session,
            session.get(
                url, timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as response,
        ):
            if response.status != 200:
                body = await response.text()
                raise GatewayError(
                    f"Failed to fetch crypto data: {response.status} {body}"
                )
            result = await response.json(content_type=None)

        return parse_envelope(result)


def parse_envelope(result: object) -> list[Asset]:
    """Turn a gateway envelope into assets, rejecting anything without a data list."""
    match result:
        case {"data": list(data)}:
            pass
        case _:
            raise GatewayError("Invalid API response format")

    try:
        return [Asset.model_validate(item) for item in data]
    except ValidationError as e:
        logger.debug(f"Rejected gateway payload: {e}")
        raise GatewayError("Invalid API response format") from e
