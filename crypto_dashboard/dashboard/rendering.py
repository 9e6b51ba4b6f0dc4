"""
Plain-text rendering of the dashboard for terminal output.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Final

from ..shared.constants import (
    ERROR_NO_DATA,
    MAX_PURCHASE_AMOUNT,
    MIN_PURCHASE_AMOUNT,
    SORT_DESC,
    VIEW_MODE_LIST,
)
from ..shared.formatters import format_price
from ..shared.models import Asset
from .models import (
    Error,
    Loading,
    Notification,
    NotificationKind,
    PollState,
    PurchaseDraft,
    Ready,
)
from .purchase import FIELD_AMOUNT, FIELD_ASSET
from .sorting import SORT_KEYS, SortDirection, SortKey

BOX_WIDTH: Final[int] = 28
RENDER_FALLBACK: Final[str] = (
    "Something went wrong while displaying prices. Press 'r' to try again."
)

_NOTIFICATION_ICONS: Final[dict[NotificationKind, str]] = {
    NotificationKind.SUCCESS: "[ok]",
    NotificationKind.ERROR: "[!!]",
    NotificationKind.INFO: "[i]",
}

logger = logging.getLogger(__name__)


def render_header(state: PollState, view_mode: str) -> str:
    match state:
        case Loading():
            status = "Loading cryptocurrency data..."
        case Error(message=message):
            status = f"Error: {message}"
        case Ready(countdown=countdown):
            status = f"Next refresh in {countdown}s"
    return f"Live Crypto Prices  |  {status}  |  view: {view_mode}"


def render_list(
    assets: Sequence[Asset],
    sort_by: SortKey | None = None,
    direction: SortDirection = "asc",
) -> str:
    """Table view with one row per asset and the active sort column marked."""
    arrow = "v" if direction == SORT_DESC else "^"
    titles = {
        key: f"{key.title()} {arrow}" if key == sort_by else key.title()
        for key in SORT_KEYS
    }
    lines = [
        f"{'#':>4}  {titles['name']:<20} {titles['symbol']:<10} {titles['price']:>16}",
    ]
    lines.extend(
        f"{asset.rank:>4}  {asset.name:<20} {asset.symbol:<10} "
        f"{format_price(asset.price_usd):>16}"
        for asset in assets
    )
    return "\n".join(lines)


def render_boxed(assets: Sequence[Asset], per_row: int = 3) -> str:
    """Card grid view."""
    cards = [
        [
            f"#{asset.rank} {asset.name}"[:BOX_WIDTH],
            asset.symbol,
            format_price(asset.price_usd),
        ]
        for asset in assets
    ]
    border = "+" + "-" * BOX_WIDTH + "+"
    rows = []
    for start in range(0, len(cards), per_row):
        chunk = cards[start : start + per_row]
        rows.append("  ".join(border for _ in chunk))
        for line in range(3):
            rows.append("  ".join(f"|{card[line]:<{BOX_WIDTH}}|" for card in chunk))
        rows.append("  ".join(border for _ in chunk))
    return "\n".join(rows)


def render_assets(
    assets: Sequence[Asset],
    view_mode: str,
    sort_by: SortKey | None = None,
    direction: SortDirection = "asc",
) -> str:
    if not assets:
        return ERROR_NO_DATA
    if view_mode == VIEW_MODE_LIST:
        return render_list(assets, sort_by, direction)
    return render_boxed(assets)


def render_purchase_form(
    draft: PurchaseDraft, errors: dict[str, str], assets: Sequence[Asset]
) -> str:
    selected = next((a for a in assets if str(a.id) == draft.selected_asset), None)
    lines = [
        f"Buy (USD {MIN_PURCHASE_AMOUNT:.2f} - {MAX_PURCHASE_AMOUNT:,.2f}): "
        f"amount={draft.amount or '-'} asset={selected.symbol if selected else '-'}"
    ]
    lines.extend(
        f"  {field}: {errors[field]}"
        for field in (FIELD_AMOUNT, FIELD_ASSET)
        if field in errors
    )
    return "\n".join(lines)


def render_notification(notification: Notification) -> str:
    if not notification.show:
        return ""
    return f"{_NOTIFICATION_ICONS[notification.kind]} {notification.message}"


class RenderBoundary:
    """
    Isolates failures of one rendered section.

    A failing render is logged and replaced by a fallback text until
    ``retry`` is called; the rest of the screen keeps rendering.
    """

    def __init__(self, fallback: str = RENDER_FALLBACK) -> None:
        self.fallback = fallback
        self.failure: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.failure is not None

    def render(self, fn: Callable[..., str], *args, **kwargs) -> str:
        if self.failure is not None:
            return self.fallback
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            logger.error(f"Render failed: {e}", exc_info=e)
            self.failure = e
            return self.fallback

    def retry(self) -> None:
        """Allow the next render to run again with the same state."""
        self.failure = None
