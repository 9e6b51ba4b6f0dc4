"""
Terminal dashboard showing live prices from the gateway.
"""

import asyncio
import logging
import sys
from typing import Final

from ..shared.constants import (
    DEFAULT_SORT_DIRECTION,
    DEFAULT_VIEW_MODE,
    ERROR_ASSET_NOT_FOUND,
    VIEW_MODE_BOXED,
    VIEW_MODE_LIST,
)
from ..shared.formatters import format_price, format_quantity
from ..shared.models import Asset
from .models import Error, PurchaseRecord, Ready
from .notifications import NotificationCenter
from .poller import CryptoDataPoller
from .purchase import PurchaseForm
from .rendering import (
    RenderBoundary,
    render_assets,
    render_header,
    render_notification,
    render_purchase_form,
)
from .sorting import SORT_KEYS, SortDirection, SortKey, next_sort, sort_assets

REDRAW_INTERVAL: Final[float] = 1.0
CLEAR_SCREEN: Final[str] = "\033[2J\033[H"

HELP_TEXT: Final[str] = """Commands:
  v                  toggle view mode (list / boxed)
  s name|symbol|price  sort by column, again to flip direction
  b AMOUNT [SYMBOL]  simulate a purchase in USD
  r                  retry rendering the price list
  x                  dismiss the notification
  q                  quit"""

logger = logging.getLogger(__name__)


class Dashboard:
    """Wires the poller, purchase form and notifications into one screen."""

    def __init__(
        self,
        poller: CryptoDataPoller | None = None,
        notifications: NotificationCenter | None = None,
        form: PurchaseForm | None = None,
        boundary: RenderBoundary | None = None,
    ) -> None:
        self.notifications = notifications or NotificationCenter()
        self.poller = poller or CryptoDataPoller()
        self.form = form or PurchaseForm(self.notifications)
        self.boundary = boundary or RenderBoundary()

        self.sort_by: SortKey | None = None
        self.sort_direction: SortDirection = DEFAULT_SORT_DIRECTION
        self.view_mode: str = DEFAULT_VIEW_MODE

        self.poller.subscribe(self._on_snapshot)

    def _on_snapshot(self, assets: list[Asset]) -> None:
        self.form.apply_default_asset(assets, self.poller.default_asset())

    def handle_sort_click(self, option: SortKey) -> None:
        self.sort_by, self.sort_direction = next_sort(
            self.sort_by, self.sort_direction, option
        )

    def toggle_view_mode(self) -> None:
        self.view_mode = (
            VIEW_MODE_LIST if self.view_mode == VIEW_MODE_BOXED else VIEW_MODE_BOXED
        )

    def sorted_assets(self) -> list[Asset]:
        return sort_assets(self.poller.assets, self.sort_by, self.sort_direction)

    def select_symbol(self, symbol: str) -> bool:
        """Select the asset with ``symbol`` in the purchase form."""
        asset = next(
            (a for a in self.poller.assets if a.symbol.upper() == symbol.upper()),
            None,
        )
        if asset is None:
            return False
        self.form.update_field("selected_asset", str(asset.id))
        return True

    def submit_purchase(self) -> PurchaseRecord | None:
        record = self.form.submit(self.poller.assets)
        if record is not None:
            # the reset draft picks the default asset again
            self.form.apply_default_asset(
                self.poller.assets, self.poller.default_asset()
            )
        return record

    def buy(self, amount: str, symbol: str | None = None) -> PurchaseRecord | None:
        """Fill the form and submit it."""
        if symbol and not self.select_symbol(symbol):
            self.notifications.show_error(ERROR_ASSET_NOT_FOUND)
            return None
        self.form.update_field("amount", amount)
        return self.submit_purchase()

    def handle_command(self, line: str) -> bool:
        """
        Apply one line of keyboard input.

        Returns:
            bool: False when the user asked to quit
        """
        command, *args = line.split() or [""]
        match command.lower(), args:
            case "q", _:
                return False
            case "v", _:
                self.toggle_view_mode()
            case "r", _:
                self.boundary.retry()
            case "x", _:
                self.notifications.hide()
            case "s", [key] if key.lower() in SORT_KEYS:
                self.handle_sort_click(key.lower())
            case "b", [amount]:
                self.buy(amount)
            case "b", [amount, symbol]:
                self.buy(amount, symbol)
            case "", _:
                pass
            case _:
                self.notifications.show(HELP_TEXT)
        return True

    def _render_prices(self) -> str:
        return render_assets(
            self.sorted_assets(), self.view_mode, self.sort_by, self.sort_direction
        )

    def render(self) -> str:
        state = self.poller.state
        sections = [
            render_notification(self.notifications.notification),
            render_header(state, self.view_mode),
        ]
        if isinstance(state, Ready):
            if state.assets:
                sections.append(
                    render_purchase_form(self.form.draft, self.form.errors, state.assets)
                )
            sections.append(self.boundary.render(self._render_prices))
        return "\n\n".join(section for section in sections if section)


def _read_command(commands: asyncio.Queue[str]) -> None:
    # readline returns "" only at end of input
    commands.put_nowait(sys.stdin.readline() or "q")


async def main() -> None:
    """Main entry point for the live dashboard."""
    dashboard = Dashboard()
    commands: asyncio.Queue[str] = asyncio.Queue()
    loop = asyncio.get_running_loop()

    interactive = sys.stdin.isatty()
    if interactive:
        loop.add_reader(sys.stdin.fileno(), _read_command, commands)

    try:
        async with dashboard.poller:
            while True:
                print(CLEAR_SCREEN + dashboard.render(), flush=True)
                try:
                    line = await asyncio.wait_for(commands.get(), REDRAW_INTERVAL)
                except TimeoutError:
                    continue
                if not dashboard.handle_command(line):
                    break
    finally:
        if interactive:
            loop.remove_reader(sys.stdin.fileno())
        dashboard.notifications.close()
    logger.info("Dashboard closed")


async def simulate_purchase(
    amount: str, symbol: str | None = None
) -> PurchaseRecord | None:
    """Fetch one snapshot and submit a single simulated purchase."""
    dashboard = Dashboard()
    await dashboard.poller.refresh()

    try:
        if isinstance(state := dashboard.poller.state, Error):
            print(f"Error: {state.message}")
            return None

        record = dashboard.buy(amount, symbol)
        print(render_notification(dashboard.notifications.notification))
        for field, message in dashboard.form.errors.items():
            print(f"  {field}: {message}")
        if record is not None:
            print(
                f"{format_price(record.usd_amount)} buys "
                f"{format_quantity(record.estimated_quantity)} "
                f"{record.selected_asset.symbol} "
                f"at {format_price(record.selected_asset.price)}"
            )
        return record
    finally:
        dashboard.notifications.close()
