"""
Gateway settings using Pydantic for environment-based configuration.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewaySettings(BaseSettings):
    """Gateway service configuration using Pydantic settings."""

    coinmarketcap_api_key: SecretStr | None = Field(
        default=None, description="CoinMarketCap Pro API key"
    )
    coinmarketcap_url: str = Field(
        default="https://pro-api.coinmarketcap.com",
        description="CoinMarketCap Pro API base URL",
    )
    upstream_timeout: float = Field(
        default=10, description="Timeout in seconds for the upstream request"
    )

    api_host: str = Field(default="0.0.0.0", description="API host address")
    api_port: int = Field(default=8000, description="API port number")
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


gateway_settings = GatewaySettings()
