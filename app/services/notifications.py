"""In-process broadcast channel for lifecycle change events.

Every subscriber sees every event; viewers discard what they do not need.
Delivery is at-most-once with no backlog: a subscriber only receives events
published while it is attached, and a subscriber whose queue is full misses
the event instead of slowing the publisher down.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Iterator
from typing import Any

from app.core.config import settings

logger = logging.getLogger(__name__)

Event = dict[str, Any]


class Subscription:
    """One viewer's attachment to the bus."""

    def __init__(self, bus: NotificationBus, maxsize: int, notify: Callable[[], None] | None = None) -> None:
        self._bus = bus
        self._notify = notify
        self._queue: queue.Queue[Event] = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def offer(self, event: Event) -> bool:
        """Queue an event without blocking; return False when it was dropped."""
        if self.closed:
            return False
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            return False
        if self._notify is not None:
            self._notify()
        return True

    def get(self, timeout: float | None = None) -> Event | None:
        """Return the next event, or None once the timeout elapses or the subscription closes."""
        if self.closed and self._queue.empty():
            return None
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> list[Event]:
        """Return every event currently queued."""
        events: list[Event] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                return events

    def close(self) -> None:
        if self.closed:
            return
        self._closed.set()
        self._bus.unsubscribe(self)

    def __iter__(self) -> Iterator[Event]:
        while not self.closed:
            event = self.get(timeout=0.5)
            if event is not None:
                yield event

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class NotificationBus:
    """Process-wide publish/subscribe service.

    The transport (websocket route) is an adapter over this object; engines
    only ever call :meth:`publish`.
    """

    def __init__(self, queue_size: int | None = None) -> None:
        self._queue_size = queue_size or settings.notification_queue_size
        self._subscribers: list[Subscription] = []
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self, notify: Callable[[], None] | None = None) -> Subscription:
        """Attach a new subscriber.

        `notify` is called from the publishing thread after each queued event,
        letting async consumers wake up without polling.
        """
        subscription = Subscription(self, self._queue_size, notify)
        with self._lock:
            self._subscribers.append(subscription)
        logger.debug("[NOTIFY] Subscriber attached (total=%s)", self.subscriber_count)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscribers:
                self._subscribers.remove(subscription)
        if not subscription.closed:
            subscription.close()

    def publish(self, event: Event) -> int:
        """Fan an event out to all current subscribers.

        Never raises and never blocks; returns how many subscribers queued it.
        """
        with self._lock:
            targets = list(self._subscribers)

        delivered = 0
        for subscription in targets:
            try:
                if subscription.offer(event):
                    delivered += 1
                else:
                    logger.warning("[NOTIFY] Dropped %s event for a slow or closed subscriber", event.get("type"))
            except Exception:
                logger.exception("[NOTIFY] Subscriber failed while receiving %s event", event.get("type"))
        return delivered
