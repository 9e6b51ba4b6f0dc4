"""
Single-slot notification store with timed auto-hide.
"""

import asyncio
import logging

from ..shared.constants import NOTIFICATION_TIMEOUT
from .models import Notification, NotificationKind

logger = logging.getLogger(__name__)


class NotificationCenter:
    """
    Holds at most one notification.

    A new ``show`` overwrites the slot and restarts the hide timer, so only
    the latest message is ever visible. Nothing is queued.
    """

    def __init__(self, timeout: float = NOTIFICATION_TIMEOUT) -> None:
        self.timeout = timeout
        self.notification = Notification()
        self._hide_handle: asyncio.TimerHandle | None = None

    @property
    def visible(self) -> bool:
        return self.notification.show

    def show(
        self, message: str, kind: NotificationKind | str = NotificationKind.INFO
    ) -> None:
        """Display ``message`` and schedule it to hide after the timeout."""
        self.notification = Notification(
            message=message, kind=NotificationKind(kind), show=True
        )
        logger.debug(f"Notification ({kind}): {message}")

        self._cancel_timer()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop, notification will not auto-hide")
            return
        self._hide_handle = loop.call_later(self.timeout, self.hide)

    def show_success(self, message: str) -> None:
        self.show(message, NotificationKind.SUCCESS)

    def show_error(self, message: str) -> None:
        self.show(message, NotificationKind.ERROR)

    def hide(self) -> None:
        """Hide the notification but keep its text for fade-out rendering."""
        self._cancel_timer()
        self.notification.show = False

    def close(self) -> None:
        """Drop any pending auto-hide."""
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._hide_handle is not None:
            self._hide_handle.cancel()
            self._hide_handle = None
