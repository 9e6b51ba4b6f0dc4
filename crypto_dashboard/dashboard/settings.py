"""
Dashboard settings using Pydantic for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardSettings(BaseSettings):
    """Dashboard client configuration using Pydantic settings."""

    gateway_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the crypto gateway",
    )
    gateway_timeout: float = Field(
        default=10, description="Timeout in seconds for a gateway request"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Create a global instance
dashboard_settings = DashboardSettings()
