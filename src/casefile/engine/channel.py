"""Message channel carrying open-quest requests to the dialog layer.

The simulation loop publishes quest ids without waiting; the dialog layer
drains them once per frame through a scoped subscription.
"""

from collections import deque

from ..logging import get_logger
from .errors import SubscriptionError

logger = get_logger(__name__)

DEFAULT_CAPACITY = 8


class OpenQuestChannel:
    """Bounded FIFO of quest ids with at most one subscriber."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("channel capacity must be at least 1")
        self.capacity = capacity
        self._pending: deque[str] = deque()
        self._subscription: "Subscription | None" = None

    @property
    def has_subscriber(self) -> bool:
        return self._subscription is not None

    def publish(self, quest_id: str) -> None:
        """Queue a request; never blocks. Dropped when nobody is listening."""
        if self._subscription is None:
            logger.debug("open_quest_unrouted", quest_id=quest_id)
            return
        if len(self._pending) >= self.capacity:
            dropped = self._pending.popleft()
            logger.warning("open_quest_dropped", quest_id=dropped)
        self._pending.append(quest_id)

    def subscribe(self) -> "Subscription":
        if self._subscription is not None:
            raise SubscriptionError("open-quest channel already has a subscriber")
        self._subscription = Subscription(self)
        logger.debug("channel_subscribed")
        return self._subscription

    def _take_all(self) -> list[str]:
        items = list(self._pending)
        self._pending.clear()
        return items

    def _release(self, subscription: "Subscription") -> None:
        if self._subscription is subscription:
            self._subscription = None
            self._pending.clear()
            logger.debug("channel_unsubscribed")


class Subscription:
    """Handle returned by OpenQuestChannel.subscribe.

    Use as a context manager so the subscription is released on every exit
    path.
    """

    def __init__(self, channel: OpenQuestChannel):
        self._channel = channel
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def drain(self) -> list[str]:
        if self._closed:
            raise SubscriptionError("subscription is closed")
        return self._channel._take_all()

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._channel._release(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
