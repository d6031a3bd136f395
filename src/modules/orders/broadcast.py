"""In-process fan-out of order updates to live subscribers.

Each connected viewer of an order owns a bounded queue.  Publishing never
blocks: a subscriber whose queue is full simply misses that message
(at-most-once, best-effort).  Viewers re-read the order on reconnect, so a
dropped message only delays a refresh.
"""

from __future__ import annotations

import json
import queue
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Set

import structlog
from django.conf import settings

logger = structlog.get_logger(__name__)


@dataclass(eq=False)
class Subscription:
    order_id: str
    messages: "queue.Queue[Dict[str, Any]]" = field(repr=False)
    dropped: int = 0

    def get(self, timeout: Optional[float] = None) -> Optional[Dict[str, Any]]:
        """Next message, or ``None`` when nothing arrived within *timeout*."""
        try:
            return self.messages.get(timeout=timeout)
        except queue.Empty:
            return None


class OrderBroadcaster:
    def __init__(self, max_queue_size: Optional[int] = None) -> None:
        self._max_queue_size = max_queue_size
        self._subscribers: Dict[str, Set[Subscription]] = {}
        self._lock = threading.Lock()

    @property
    def max_queue_size(self) -> int:
        if self._max_queue_size is not None:
            return self._max_queue_size
        return settings.LIVE_UPDATES_QUEUE_SIZE

    def subscribe(self, order_id: str) -> Subscription:
        subscription = Subscription(
            order_id=str(order_id), messages=queue.Queue(maxsize=self.max_queue_size)
        )
        with self._lock:
            self._subscribers.setdefault(subscription.order_id, set()).add(subscription)
        logger.info("live_updates.subscribed", order_id=subscription.order_id)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            subscribers = self._subscribers.get(subscription.order_id)
            if subscribers is None:
                return
            subscribers.discard(subscription)
            if not subscribers:
                del self._subscribers[subscription.order_id]
        logger.info(
            "live_updates.unsubscribed",
            order_id=subscription.order_id,
            dropped=subscription.dropped,
        )

    def subscriber_count(self, order_id: str) -> int:
        with self._lock:
            return len(self._subscribers.get(str(order_id), ()))

    def publish(self, order_id: str, message: Dict[str, Any]) -> int:
        """Offer *message* to every subscriber of *order_id*.

        Returns the number of subscribers that received it.
        """
        with self._lock:
            subscribers = list(self._subscribers.get(str(order_id), ()))

        delivered = 0
        for subscription in subscribers:
            try:
                subscription.messages.put_nowait(message)
            except queue.Full:
                with self._lock:
                    subscription.dropped += 1
                logger.warning(
                    "live_updates.message_dropped",
                    order_id=str(order_id),
                    event=message.get("event_name"),
                )
                continue
            delivered += 1
        return delivered


def sse_stream(
    broadcaster: OrderBroadcaster,
    order_id: str,
    heartbeat: Optional[float] = None,
    max_messages: Optional[int] = None,
) -> Iterator[str]:
    """Yield Server-Sent Event frames for *order_id* until closed.

    Subscribes on first iteration.  A comment line is sent whenever
    *heartbeat* seconds pass without a message so proxies keep the
    connection open.  The subscription is released when the consumer
    stops iterating.
    """
    if heartbeat is None:
        heartbeat = settings.LIVE_UPDATES_HEARTBEAT_SECONDS
    sent = 0
    subscription = broadcaster.subscribe(order_id)
    try:
        yield f": connected to order {subscription.order_id}\n\n"
        while max_messages is None or sent < max_messages:
            message = subscription.get(timeout=heartbeat)
            if message is None:
                yield ": keepalive\n\n"
                continue
            yield (
                f"event: order_update\n"
                f"data: {json.dumps(message, default=str)}\n\n"
            )
            sent += 1
    finally:
        broadcaster.unsubscribe(subscription)


broadcaster = OrderBroadcaster()
