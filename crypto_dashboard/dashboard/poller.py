"""
Client-side poller that keeps the asset snapshot fresh and drives the countdown.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from ..shared.constants import (
    COUNTDOWN_RESET,
    COUNTDOWN_TICK,
    DEFAULT_CRYPTO_SYMBOL,
    ERROR_GENERIC,
    INITIAL_COUNTDOWN,
    REFRESH_INTERVAL,
)
from ..shared.models import Asset
from .gateway_client import GatewayClient
from .models import Error, Loading, PollState, Ready

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[list[Asset]], None]


class AssetSource(Protocol):
    async def fetch_assets(self) -> list[Asset]: ...


def default_asset_id(assets: list[Asset], symbol: str = DEFAULT_CRYPTO_SYMBOL) -> str:
    """
    Pick the asset a purchase form should start with.

    Returns:
        str: Id of the asset with ``symbol`` if present, otherwise the first
        asset's id, or an empty string for an empty snapshot
    """
    if not assets:
        return ""
    preferred = next((asset for asset in assets if asset.symbol == symbol), None)
    return str((preferred or assets[0]).id)


class CryptoDataPoller:
    """
    Polls the gateway on a fixed interval and tracks loading/error/ready state.

    Two independent tasks are owned by the poller: the refresh loop, which is
    the only driver of data freshness, and the countdown loop, which only
    updates the seconds-until-refresh display. Both are released by ``stop``.
    """

    def __init__(
        self,
        source: AssetSource | None = None,
        refresh_interval: float = REFRESH_INTERVAL,
        tick_interval: float = COUNTDOWN_TICK,
        initial_countdown: int = INITIAL_COUNTDOWN,
        countdown_reset: int = COUNTDOWN_RESET,
        preferred_symbol: str = DEFAULT_CRYPTO_SYMBOL,
    ) -> None:
        self.source = source or GatewayClient()
        self.refresh_interval = refresh_interval
        self.tick_interval = tick_interval
        self.initial_countdown = initial_countdown
        self.countdown_reset = countdown_reset
        self.preferred_symbol = preferred_symbol

        self.assets: list[Asset] = []
        self.error: str | None = None
        self.countdown = initial_countdown

        self._loaded = False
        self._pending = 0
        self._closed = False
        self._timers: list[asyncio.Task] = []
        self._in_flight: set[asyncio.Task] = set()
        self._listeners: list[SnapshotListener] = []

    @property
    def state(self) -> PollState:
        if self.error is not None:
            return Error(self.error)
        if not self._loaded:
            return Loading()
        return Ready(assets=self.assets, countdown=self.countdown)

    @property
    def refreshing(self) -> bool:
        return self._pending > 0

    @property
    def running(self) -> bool:
        return bool(self._timers)

    def subscribe(self, listener: SnapshotListener) -> None:
        """Register a callback run after every successful refresh."""
        self._listeners.append(listener)

    def default_asset(self) -> str:
        """Default purchase asset for the current snapshot."""
        return default_asset_id(self.assets, self.preferred_symbol)

    async def refresh(self) -> None:
        """
        Fetch one snapshot from the source and update state.

        Failures never propagate: they put the poller in the error state and
        keep the previous snapshot. Results arriving after ``stop`` are dropped.
        """
        if self._closed:
            return

        self._pending += 1
        try:
            assets = await self.source.fetch_assets()
        except Exception as e:
            if not self._closed:
                logger.error(f"Crypto data fetch error: {e}")
                self.error = str(e) or ERROR_GENERIC
            return
        finally:
            self._pending -= 1

        if self._closed:
            logger.debug("Dropping snapshot received after shutdown")
            return

        self.assets = assets
        self.error = None
        self.countdown = self.initial_countdown
        self._loaded = True
        logger.debug(f"Snapshot replaced with {len(assets)} assets")

        for listener in list(self._listeners):
            try:
                listener(assets)
            except Exception as e:
                logger.error(f"Snapshot listener failed: {e}", exc_info=e)

    def tick(self) -> None:
        """Advance the countdown by one step while a snapshot is displayed."""
        if not isinstance(self.state, Ready) or self.refreshing:
            return

        if self.countdown <= 1:
            self.countdown = self.countdown_reset
        else:
            self.countdown -= 1

    def request_refresh(self) -> asyncio.Task:
        """Dispatch a refresh without waiting for it."""
        task = asyncio.create_task(self.refresh())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    def start(self) -> None:
        """Refresh immediately and start both timers. Requires a running loop."""
        if self._timers:
            return

        self._closed = False
        self.request_refresh()
        self._timers = [
            asyncio.create_task(self._refresh_loop(), name="poller-refresh"),
            asyncio.create_task(self._countdown_loop(), name="poller-countdown"),
        ]
        logger.info(
            f"Polling {type(self.source).__name__} every {self.refresh_interval}s"
        )

    async def stop(self) -> None:
        """Cancel both timers. In-flight fetches finish but change nothing."""
        self._closed = True
        timers, self._timers = self._timers, []
        for task in timers:
            task.cancel()
        await asyncio.gather(*timers, return_exceptions=True)
        logger.info("Poller stopped")

    async def __aenter__(self) -> "CryptoDataPoller":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    async def _refresh_loop(self) -> None:
        """Dispatch a refresh every interval, whether or not one is pending."""
        try:
            while True:
                await asyncio.sleep(self.refresh_interval)
                self.request_refresh()
        except asyncio.CancelledError:
            logger.debug("Refresh loop cancelled")
            raise

    async def _countdown_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.tick_interval)
                self.tick()
        except asyncio.CancelledError:
            logger.debug("Countdown loop cancelled")
            raise
