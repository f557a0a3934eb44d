"""
Notification Scheduler - transient, self-expiring advisory messages.

Each mount point owns its own scheduler; nothing is shared or persisted.
Expiry runs on the asyncio event loop (``loop.call_later``). Removal is
keyed by id, so manual dismissal and timer expiry can race freely: which
ever comes second is a no-op.
"""

import asyncio
import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from storefront.config import DEFAULT_NOTIFICATION_MS
from storefront.logging import get_logger

logger = get_logger(__name__)


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    id: int
    message: str
    kind: NotificationKind
    duration_ms: int
    created_at: float  # Event loop time at enqueue


class NotificationScheduler:
    """
    Ordered set of active notifications for one mount point.

    Usage:
        notifications = NotificationScheduler(on_change=render)
        nid = notifications.show_success("Item removed from cart", 2000)
        notifications.dismiss(nid)
    """

    def __init__(
        self,
        on_change: Optional[Callable[[], None]] = None,
        default_duration_ms: int = DEFAULT_NOTIFICATION_MS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.on_change = on_change
        self.default_duration_ms = default_duration_ms
        self._loop = loop
        self._ids = itertools.count(1)
        self._active: Dict[int, Notification] = {}
        self._timers: Dict[int, asyncio.TimerHandle] = {}

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def active(self) -> List[Notification]:
        """Visible notifications in enqueue order."""
        return list(self._active.values())

    def __len__(self) -> int:
        return len(self._active)

    def __contains__(self, notification_id: int) -> bool:
        return notification_id in self._active

    def enqueue(
        self,
        message: str,
        kind: NotificationKind = NotificationKind.SUCCESS,
        duration_ms: Optional[int] = None,
    ) -> int:
        """
        Show a notification and schedule its removal.

        Args:
            message: Text to display
            kind: Severity (success, error, warning, info)
            duration_ms: Display time measured from now (default 3000)

        Returns:
            Notification id

        Raises:
            ValueError: If duration is not positive
        """
        duration_ms = self.default_duration_ms if duration_ms is None else duration_ms
        if duration_ms <= 0:
            raise ValueError(f"duration_ms must be positive, got {duration_ms}")

        loop = self.loop
        notification = Notification(
            id=next(self._ids),
            message=message,
            kind=NotificationKind(kind),
            duration_ms=duration_ms,
            created_at=loop.time(),
        )
        self._active[notification.id] = notification
        self._timers[notification.id] = loop.call_later(
            duration_ms / 1000, self._expire, notification.id
        )
        logger.debug(f"Notification {notification.id} ({notification.kind.value}) shown for {duration_ms}ms")
        self._changed()
        return notification.id

    def show_success(self, message: str, duration_ms: Optional[int] = None) -> int:
        return self.enqueue(message, NotificationKind.SUCCESS, duration_ms)

    def show_error(self, message: str, duration_ms: Optional[int] = None) -> int:
        return self.enqueue(message, NotificationKind.ERROR, duration_ms)

    def show_warning(self, message: str, duration_ms: Optional[int] = None) -> int:
        return self.enqueue(message, NotificationKind.WARNING, duration_ms)

    def show_info(self, message: str, duration_ms: Optional[int] = None) -> int:
        return self.enqueue(message, NotificationKind.INFO, duration_ms)

    def dismiss(self, notification_id: int) -> bool:
        """
        Remove a notification now and cancel its timer.

        Returns:
            True if it was active, False if already gone
        """
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()
        return self._remove(notification_id)

    def _expire(self, notification_id: int) -> None:
        self._timers.pop(notification_id, None)
        self._remove(notification_id)

    def _remove(self, notification_id: int) -> bool:
        if self._active.pop(notification_id, None) is None:
            return False
        self._changed()
        return True

    def close(self) -> None:
        """Cancel pending timers and drop every notification (mount teardown)."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        if self._active:
            self._active.clear()
            self._changed()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
