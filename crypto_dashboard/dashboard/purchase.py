"""
Purchase form validation and simulated submission.
"""

import logging
import math
import re
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Final, Literal

from ..shared.constants import (
    ERROR_AMOUNT_REQUIRED,
    ERROR_AMOUNT_TOO_HIGH,
    ERROR_AMOUNT_TOO_LOW,
    ERROR_ASSET_NOT_FOUND,
    ERROR_FORM_INVALID,
    ERROR_INVALID_NUMBER,
    ERROR_SELECT_ASSET,
    MAX_PURCHASE_AMOUNT,
    SUCCESS_PURCHASE_SUBMITTED,
)
from ..shared.models import Asset
from .models import PurchaseDraft, PurchaseRecord, PurchasedAsset
from .notifications import NotificationCenter

FIELD_AMOUNT: Final[str] = "amount"
FIELD_ASSET: Final[str] = "asset"

# Leading number of an amount; anything after it is ignored
AMOUNT_PREFIX: Final[re.Pattern[str]] = re.compile(
    r"\s*([+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)

FormField = Literal["amount", "selected_asset"]
PurchaseSink = Callable[[PurchaseRecord], None]

logger = logging.getLogger(__name__)


def parse_amount(text: str) -> float | None:
    """
    Parse the numeric prefix of a USD amount.

    Trailing text is ignored, so ``"12abc"`` reads as 12. ``"Infinity"`` is
    accepted and left for the range checks to reject.

    Returns:
        float | None: The parsed amount, or None when the text does not start
        with a number
    """
    if (match := AMOUNT_PREFIX.match(text)) is None:
        return None
    return float(match.group(1))


def validate_purchase(
    draft: PurchaseDraft, max_amount: float = MAX_PURCHASE_AMOUNT
) -> dict[str, str]:
    """
    Validate a purchase draft.

    Amount checks run in priority order: required, parseable, positive, within
    the maximum. The documented minimum of 0.01 is not enforced separately, so
    any positive amount passes the lower bound. The asset is always checked.

    Returns:
        dict[str, str]: Error message per field, empty when the draft is valid
    """
    errors: dict[str, str] = {}

    if not draft.amount.strip():
        errors[FIELD_AMOUNT] = ERROR_AMOUNT_REQUIRED
    elif (amount := parse_amount(draft.amount)) is None:
        errors[FIELD_AMOUNT] = ERROR_INVALID_NUMBER
    elif amount <= 0:
        errors[FIELD_AMOUNT] = ERROR_AMOUNT_TOO_LOW
    elif amount > max_amount:
        errors[FIELD_AMOUNT] = ERROR_AMOUNT_TOO_HIGH

    if not draft.selected_asset:
        errors[FIELD_ASSET] = ERROR_SELECT_ASSET

    return errors


class PurchaseForm:
    """Form state plus the submit flow for simulated purchases."""

    def __init__(
        self,
        notifications: NotificationCenter,
        sink: PurchaseSink | None = None,
        max_amount: float = MAX_PURCHASE_AMOUNT,
    ) -> None:
        self.notifications = notifications
        self.sink = sink
        self.max_amount = max_amount
        self.draft = PurchaseDraft()
        self.errors: dict[str, str] = {}

    def update_field(self, field: FormField, value: str) -> None:
        """Set a draft field and clear the error shown for it."""
        setattr(self.draft, field, value)
        self.errors.pop(FIELD_AMOUNT if field == "amount" else FIELD_ASSET, None)

    def apply_default_asset(self, assets: Sequence[Asset], default_id: str) -> None:
        """Pre-select ``default_id`` unless the user already picked an asset."""
        if assets and not self.draft.selected_asset and default_id:
            self.draft.selected_asset = default_id

    def validate(self) -> bool:
        self.errors = validate_purchase(self.draft, self.max_amount)
        return not self.errors

    def submit(self, assets: Sequence[Asset]) -> PurchaseRecord | None:
        """
        Submit the draft against the current snapshot.

        Args:
            assets: Snapshot used to resolve the selected asset's price

        Returns:
            PurchaseRecord: The simulated purchase, or None when validation
            failed or the selected asset is no longer in the snapshot. In both
            failure cases the draft is left untouched.
        """
        if not self.validate():
            self.notifications.show_error(ERROR_FORM_INVALID)
            return None

        asset = next(
            (a for a in assets if str(a.id) == self.draft.selected_asset), None
        )
        if asset is None:
            logger.warning(
                f"Asset {self.draft.selected_asset} not found in current snapshot"
            )
            self.notifications.show_error(ERROR_ASSET_NOT_FOUND)
            return None

        amount = parse_amount(self.draft.amount)
        record = PurchaseRecord(
            usd_amount=amount,
            selected_asset=PurchasedAsset(
                id=asset.id,
                name=asset.name,
                symbol=asset.symbol,
                price=asset.price_usd,
            ),
            estimated_quantity=(
                amount / asset.price_usd if asset.price_usd else math.inf
            ),
            timestamp=datetime.now(UTC),
        )

        logger.info(f"Purchase data: {record.model_dump_json()}")
        if self.sink is not None:
            self.sink(record)

        self.draft = PurchaseDraft()
        self.errors = {}
        self.notifications.show_success(SUCCESS_PURCHASE_SUBMITTED)
        return record
