"""
Data models for the crypto dashboard application.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import QUOTE_CURRENCY


class AssetQuote(BaseModel):
    """Price information for a single fiat currency."""

    model_config = ConfigDict(extra="allow", frozen=True)

    price: Annotated[float, Field(ge=0, description="Current price")]


class Asset(BaseModel):
    """Model representing one cryptocurrency in a listings snapshot."""

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        str_strip_whitespace=True,
    )

    id: Annotated[int, Field(description="Provider identifier")]
    name: Annotated[str, Field(description="Display name")]
    symbol: Annotated[str, Field(description="Ticker symbol")]
    cmc_rank: Annotated[int, Field(gt=0, description="Market cap ranking")]
    quote: Annotated[
        dict[str, AssetQuote], Field(description="Prices keyed by currency")
    ]

    @field_validator("quote")
    @classmethod
    def require_usd_quote(cls, value: dict[str, AssetQuote]) -> dict[str, AssetQuote]:
        """Make sure a USD price is present."""
        if QUOTE_CURRENCY not in value:
            raise ValueError(f"Missing {QUOTE_CURRENCY} quote")
        return value

    @property
    def rank(self) -> int:
        return self.cmc_rank

    @property
    def price_usd(self) -> float:
        return self.quote[QUOTE_CURRENCY].price


class ApiStatus(BaseModel):
    """Status block returned by the market-data provider."""

    model_config = ConfigDict(extra="allow")

    timestamp: str | None = None
    error_code: int = 0
    error_message: str | None = None
