"""Transient notifications with per-entry timed expiry."""

import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..logging import get_logger

logger = get_logger(__name__)

DISPLAY_SECONDS = 3.0


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"


@dataclass(frozen=True)
class Notification:
    id: str
    message: str
    severity: Severity
    created_at: float

    def expires_at(self, ttl: float) -> float:
        return self.created_at + ttl


class NotificationQueue:
    """Append-only log; each entry expires on its own timer.

    ``clock`` returns the current time in the same units as ``ttl``.
    """

    def __init__(self, clock: Callable[[], float], ttl: float = DISPLAY_SECONDS):
        self.clock = clock
        self.ttl = ttl
        self._entries: list[Notification] = []
        self._timers: list[tuple[float, int, str]] = []
        self._sequence = itertools.count()

    def push(self, message: str, severity: Severity = Severity.INFO) -> Notification:
        now = self.clock()
        seq = next(self._sequence)
        notification = Notification(
            id=f"{int(now * 1000)}-{seq}",
            message=message,
            severity=Severity(severity),
            created_at=now,
        )
        self._entries.append(notification)
        heapq.heappush(self._timers, (notification.expires_at(self.ttl), seq, notification.id))
        logger.debug("notification_pushed", id=notification.id, severity=notification.severity.value)
        return notification

    def expire(self, now: float | None = None) -> list[Notification]:
        """Fire every timer that is due and drop exactly those entries."""
        now = self.clock() if now is None else now
        due: set[str] = set()
        while self._timers and self._timers[0][0] <= now:
            _, _, notification_id = heapq.heappop(self._timers)
            due.add(notification_id)
        if not due:
            return []
        expired = [n for n in self._entries if n.id in due]
        self._entries = [n for n in self._entries if n.id not in due]
        for notification in expired:
            logger.debug("notification_expired", id=notification.id)
        return expired

    def visible(self, now: float | None = None) -> list[Notification]:
        """Entries on display at ``now``, in insertion order."""
        now = self.clock() if now is None else now
        return [n for n in self._entries if n.created_at <= now < n.expires_at(self.ttl)]

    def __len__(self) -> int:
        return len(self._entries)
