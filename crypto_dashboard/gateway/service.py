"""FastAPI gateway that proxies cryptocurrency listings from CoinMarketCap."""

import logging
from typing import Annotated, Final

import uvicorn
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..shared.constants import API_START_POSITION, ERROR_FETCH_FAILED, MAX_CRYPTO_ASSETS
from .models import CryptoResponse, ErrorResponse
from .settings import gateway_settings
from .upstream import CoinMarketCapClient, ListingsError, ListingsOk

CACHE_CONTROL: Final[str] = "public, s-maxage=60, stale-while-revalidate=300"
ALLOWED_METHODS: Final[str] = "GET"

ERROR_NOT_FOUND: Final[str] = "Endpoint not found"
ERROR_INTERNAL: Final[str] = "An internal server error occurred"

logger = logging.getLogger(__name__)


def get_listings_client() -> CoinMarketCapClient:
    """
    Dependency function to provide the upstream client.

    Returns:
        CoinMarketCapClient: Client configured from gateway settings
    """
    api_key = gateway_settings.coinmarketcap_api_key
    return CoinMarketCapClient(
        api_key=api_key.get_secret_value() if api_key else None,
        base_url=gateway_settings.coinmarketcap_url,
        limit=MAX_CRYPTO_ASSETS,
        start=API_START_POSITION,
        timeout=gateway_settings.upstream_timeout,
    )


def _fetch_failed(details: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=ERROR_FETCH_FAILED, details=details).model_dump(),
    )


app = FastAPI(
    title="Crypto Dashboard Gateway",
    description="Proxy for live cryptocurrency prices from CoinMarketCap",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=[ALLOWED_METHODS],
    allow_headers=["*"],
)


@app.get("/", response_model=dict[str, str])
async def root() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        dict[str, str]: Health status information
    """
    return {"message": "Crypto Dashboard Gateway is running", "status": "healthy"}


@app.get(
    "/api/crypto",
    response_model=CryptoResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_crypto(
    client: Annotated[CoinMarketCapClient, Depends(get_listings_client)],
) -> JSONResponse:
    """
    Return the top cryptocurrencies by market cap.

    One upstream request is made per call. Successful responses may be cached
    by shared caches for 60 seconds and revalidated in the background.

    Args:
        client: Upstream listings client

    Returns:
        JSONResponse: ``{data, status}`` on success, or a 500 error envelope
        when the key is missing or the provider fails
    """
    try:
        result = await client.fetch_listings()
    except Exception as e:
        logger.error(f"Unexpected error fetching crypto data: {e}", exc_info=e)
        return _fetch_failed(str(e) or type(e).__name__)

    match result:
        case ListingsOk(assets=assets, status=status):
            body = CryptoResponse(data=assets, status=status)
            return JSONResponse(
                content=body.model_dump(mode="json"),
                headers={"Cache-Control": CACHE_CONTROL},
            )
        case ListingsError(details=details):
            logger.error(f"Error fetching crypto data: {details}")
            return _fetch_failed(details)
        case _:
            # This should not happen with a proper listings client
            logger.error(f"Unexpected listings result: {result!r}")
            return _fetch_failed("Invalid result returned from listings client")


@app.options("/api/crypto")
async def crypto_options() -> Response:
    """Advertise the methods allowed on the crypto endpoint."""
    return Response(
        status_code=200,
        headers={
            "Allow": ALLOWED_METHODS,
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Allow-Origin": "*",
        },
    )


@app.exception_handler(404)
async def not_found_handler(_: Request, __: Exception) -> JSONResponse:
    """Handle 404 errors.

    Returns:
        JSONResponse: Error response in JSON format
    """
    return JSONResponse(
        status_code=404,
        content=ErrorResponse(error=ERROR_NOT_FOUND).model_dump(),
    )


@app.exception_handler(500)
async def internal_error_handler(_: Request, exc: Exception) -> JSONResponse:
    """Handle internal server errors.

    Args:
        exc: The exception that was raised

    Returns:
        JSONResponse: Error response in JSON format
    """
    logger.error(f"Internal server error: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=ERROR_INTERNAL).model_dump(),
    )


async def main() -> None:
    """Main entry point for the gateway server."""
    if gateway_settings.coinmarketcap_api_key is None:
        logger.warning("COINMARKETCAP_API_KEY is not set, /api/crypto will fail")

    config = uvicorn.Config(
        app,
        host=gateway_settings.api_host,
        port=gateway_settings.api_port,
        log_level=gateway_settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
