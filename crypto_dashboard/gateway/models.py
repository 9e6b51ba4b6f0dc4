"""
Gateway response models.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from ..shared.models import ApiStatus, Asset


class CryptoResponse(BaseModel):
    """Envelope returned by GET /api/crypto."""

    data: Annotated[list[Asset], Field(description="Top assets by market cap")]
    status: Annotated[ApiStatus, Field(description="Provider status block")]


class ErrorResponse(BaseModel):
    """Model for error responses."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    error: Annotated[str, Field(description="User-facing error message")]
    details: Annotated[
        str | None, Field(description="Diagnostic detail")
    ] = None
