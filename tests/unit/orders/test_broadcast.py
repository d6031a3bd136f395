"""Unit tests for the live-update broadcaster and the SSE frame stream."""

from __future__ import annotations

import json
import logging
import threading

import pytest

from modules.orders.broadcast import OrderBroadcaster, sse_stream

pytestmark = pytest.mark.unit


@pytest.fixture()
def hub():
    return OrderBroadcaster(max_queue_size=2)


class TestOrderBroadcaster:
    def test_publish_reaches_only_that_order(self, hub):
        mine = hub.subscribe("order-1")
        other = hub.subscribe("order-2")

        delivered = hub.publish("order-1", {"event_name": "OrderUpdated"})

        assert delivered == 1
        assert mine.get(timeout=0) == {"event_name": "OrderUpdated"}
        assert other.get(timeout=0) is None

    def test_full_queue_drops_without_blocking(self, hub, caplog):
        sub = hub.subscribe("order-1")
        hub.publish("order-1", {"n": 1})
        hub.publish("order-1", {"n": 2})

        with caplog.at_level(logging.WARNING):
            delivered = hub.publish("order-1", {"n": 3})

        assert delivered == 0
        assert sub.dropped == 1
        assert [sub.get(timeout=0), sub.get(timeout=0)] == [{"n": 1}, {"n": 2}]
        assert any(
            "live_updates.message_dropped" in record.getMessage()
            for record in caplog.records
        )

    def test_slow_subscriber_does_not_affect_others(self, hub):
        slow = hub.subscribe("order-1")
        fast = hub.subscribe("order-1")
        for n in range(2):
            hub.publish("order-1", {"n": n})
        fast.get(timeout=0)
        fast.get(timeout=0)

        assert hub.publish("order-1", {"n": 2}) == 1
        assert slow.dropped == 1
        assert fast.get(timeout=0) == {"n": 2}

    def test_dropped_count_exact_under_concurrent_publishers(self, hub):
        sub = hub.subscribe("order-1")
        hub.publish("order-1", {"n": 0})
        hub.publish("order-1", {"n": 1})
        start = threading.Barrier(8)

        def publish_many():
            start.wait()
            for n in range(250):
                hub.publish("order-1", {"n": n})

        threads = [threading.Thread(target=publish_many) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sub.dropped == 8 * 250

    def test_unsubscribe_removes_subscription(self, hub):
        sub = hub.subscribe("order-1")
        assert hub.subscriber_count("order-1") == 1

        hub.unsubscribe(sub)
        hub.unsubscribe(sub)

        assert hub.subscriber_count("order-1") == 0
        assert hub.publish("order-1", {"n": 1}) == 0

    def test_default_queue_size_from_settings(self, settings):
        settings.LIVE_UPDATES_QUEUE_SIZE = 3
        assert OrderBroadcaster().subscribe("x").messages.maxsize == 3


class TestSseStream:
    def test_frames(self, hub):
        stream = sse_stream(hub, "order-1", heartbeat=0.01)

        assert next(stream) == ": connected to order order-1\n\n"
        assert hub.subscriber_count("order-1") == 1

        assert next(stream) == ": keepalive\n\n"

        hub.publish("order-1", {"event_name": "BoxesChanged", "action": "added"})
        frame = next(stream)
        assert frame.startswith("event: order_update\ndata: ")
        assert frame.endswith("\n\n")
        payload = json.loads(frame.split("data: ", 1)[1])
        assert payload == {"event_name": "BoxesChanged", "action": "added"}

        stream.close()
        assert hub.subscriber_count("order-1") == 0

    def test_max_messages_ends_stream(self, hub):
        stream = sse_stream(hub, "order-1", heartbeat=0.01, max_messages=1)
        next(stream)
        hub.publish("order-1", {"n": 1})

        frames = list(stream)

        assert len(frames) == 1
        assert frames[0].startswith("event: order_update")
        assert hub.subscriber_count("order-1") == 0

    def test_no_subscription_until_iterated(self, hub):
        sse_stream(hub, "order-1")
        assert hub.subscriber_count("order-1") == 0
