# ABOUTME: Notification bus and connectivity-status notifier for the heartbeat
# ABOUTME: Publishes named events and suppresses repeated connection events within a window

import logging
import time
from collections import defaultdict
from collections.abc import Callable

from huebeat.heartbeat.types import ConnectionStatus

logger = logging.getLogger(__name__)

# Subscribers receive no payload; the event name is the whole message
Subscriber = Callable[[], None]
Clock = Callable[[], float]


class NotificationBus:
    """
    In-process publish/subscribe by event name.

    Subscribers are called synchronously in subscription order. A subscriber
    that raises is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._subscribers: defaultdict[str, list[Subscriber]] = defaultdict(list)

    def subscribe(self, name: str, callback: Subscriber) -> None:
        self._subscribers[name].append(callback)

    def unsubscribe(self, name: str, callback: Subscriber) -> None:
        """Remove a subscriber. No-op if it was never subscribed."""
        callbacks = self._subscribers.get(name)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def publish(self, name: str) -> None:
        for callback in list(self._subscribers.get(name, ())):
            try:
                callback()
            except Exception:
                logger.exception(f"Subscriber for {name} failed")


class ConnectionStatusNotifier:
    """
    Emits connectivity events with de-duplication.

    localConnection and noLocalConnection are each suppressed while less than
    `window` seconds have passed since that same event was last emitted.
    Emitting one of the pair clears the other's timestamp, so a state flip is
    always reported at once. notAuthenticated is never suppressed.
    """

    def __init__(
        self,
        bus: NotificationBus,
        window: float = 10.0,
        clock: Clock = time.monotonic,
    ):
        """
        Initialize the notifier.

        Args:
            bus: Bus the events are published on
            window: Suppression window in seconds
            clock: Monotonic time source, injectable for tests
        """
        self.bus = bus
        self.window = window
        self._clock = clock
        self._last_connected: float | None = None
        self._last_disconnected: float | None = None

    def _is_due(self, last: float | None, now: float) -> bool:
        return last is None or now - last > self.window

    def notify_local_connection(self) -> bool:
        """Report a successful poll. Returns True if the event was published."""
        now = self._clock()
        if not self._is_due(self._last_connected, now):
            return False

        self._publish(ConnectionStatus.LOCAL_CONNECTION)
        self._last_connected = now
        self._last_disconnected = None
        return True

    def notify_no_local_connection(self) -> bool:
        """Report a transport failure. Returns True if the event was published."""
        now = self._clock()
        if not self._is_due(self._last_disconnected, now):
            return False

        self._publish(ConnectionStatus.NO_LOCAL_CONNECTION)
        self._last_disconnected = now
        self._last_connected = None
        return True

    def notify_not_authenticated(self) -> None:
        self._publish(ConnectionStatus.NOT_AUTHENTICATED)

    def _publish(self, status: ConnectionStatus) -> None:
        logger.info(f"Posting notification: {status.value}")
        self.bus.publish(status.value)
