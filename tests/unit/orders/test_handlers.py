"""Unit tests for Orders event handlers and in-memory bus."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.orders.broadcast import OrderBroadcaster
from modules.orders.events import ItemStatusUpdated, OrderCreated, OrderDeleted
from modules.orders.handlers import (
    ItemStatusUpdatedHandler,
    LiveUpdateHandler,
    OrderCreatedHandler,
)
from shared.domain.bus import IEventHandler
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


def _status_event(**overrides):
    values = {
        "aggregate_id": uuid4(),
        "item_id": "li-1",
        "changes": {"quality_status": "Packed"},
        "order_status": "Completed",
        "previous_order_status": "In Progress",
        "actor_role": "Quality",
    }
    values.update(overrides)
    return ItemStatusUpdated(**values)


def test_order_created_handler_logs(caplog):
    handler = OrderCreatedHandler()
    event = OrderCreated(aggregate_id=uuid4(), name="#1001", store_key="nl", source="shopify")

    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        handler.handle(event)

    assert any("order.event.created" in record.getMessage() for record in caplog.records)


def test_item_status_handler_logs_status_change(caplog):
    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        ItemStatusUpdatedHandler().handle(_status_event())

    messages = [record.getMessage() for record in caplog.records]
    assert any("order.event.item_status_updated" in m for m in messages)
    assert any("order.event.status_changed" in m for m in messages)


def test_item_status_handler_skips_unchanged_status(caplog):
    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        ItemStatusUpdatedHandler().handle(
            _status_event(order_status="In Progress", previous_order_status="In Progress")
        )

    assert not any(
        "order.event.status_changed" in record.getMessage() for record in caplog.records
    )


def test_live_update_handler_forwards_event_dict():
    hub = OrderBroadcaster(max_queue_size=5)
    event = _status_event()
    sub = hub.subscribe(str(event.aggregate_id))

    LiveUpdateHandler(target=hub).handle(event)

    message = sub.get(timeout=0)
    assert message["event_name"] == "ItemStatusUpdated"
    assert message["aggregate_id"] == str(event.aggregate_id)
    assert message["changes"] == {"quality_status": "Packed"}


@pytest.mark.parametrize(
    "handler_class", [OrderCreatedHandler, ItemStatusUpdatedHandler, LiveUpdateHandler]
)
def test_handlers_implement_event_handler_interface(handler_class):
    assert IEventHandler in handler_class.__mro__

def test_bus_dispatches_to_subscribed_handler():
    bus = InMemoryEventBus()
    handler = MagicMock()
    bus.subscribe(OrderDeleted, handler)

    event = OrderDeleted(aggregate_id=uuid4(), name="#1")
    bus.publish(event)

    handler.handle.assert_called_once_with(event)


def test_bus_isolates_failing_handler(caplog):
    bus = InMemoryEventBus()
    failing = MagicMock()
    failing.handle.side_effect = RuntimeError("boom")
    healthy = MagicMock()
    bus.subscribe(OrderDeleted, failing)
    bus.subscribe(OrderDeleted, healthy)

    with caplog.at_level(logging.ERROR):
        bus.publish(OrderDeleted(aggregate_id=uuid4(), name="#1"))

    healthy.handle.assert_called_once()
    assert any("event_bus.handler_failed" in record.getMessage() for record in caplog.records)


def test_unsubscribe_stops_delivery():
    bus = InMemoryEventBus()
    handler = MagicMock()
    bus.subscribe(OrderDeleted, handler)
    bus.unsubscribe(OrderDeleted, handler)

    bus.publish(OrderDeleted(aggregate_id=uuid4(), name="#1"))

    handler.handle.assert_not_called()
