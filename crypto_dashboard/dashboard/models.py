"""
Client-side state models for the dashboard.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..shared.models import Asset


@dataclass(frozen=True)
class Loading:
    """Waiting for the first gateway response."""


@dataclass(frozen=True)
class Error:
    """The last refresh failed."""

    message: str


@dataclass(frozen=True)
class Ready:
    """A snapshot is available."""

    assets: list[Asset]
    countdown: int


PollState = Loading | Error | Ready


class NotificationKind(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass
class Notification:
    """Single notification slot."""

    message: str = ""
    kind: NotificationKind = NotificationKind.INFO
    show: bool = False


@dataclass
class PurchaseDraft:
    """In-progress purchase form input, kept as raw text."""

    amount: str = ""
    selected_asset: str = ""


class PurchasedAsset(BaseModel):
    """Summary of the asset a purchase was made against."""

    id: int
    name: str
    symbol: str
    price: float


class PurchaseRecord(BaseModel):
    """Simulated purchase, never persisted."""

    model_config = ConfigDict(frozen=True)

    usd_amount: Annotated[float, Field(gt=0, description="Amount spent in USD")]
    selected_asset: PurchasedAsset
    estimated_quantity: Annotated[
        float, Field(description="Coins bought at the snapshot price")
    ]
    timestamp: datetime

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        """Serialize datetime to ISO format."""
        return value.isoformat()
