"""Event handlers for Orders domain events."""

from __future__ import annotations

from typing import Optional

import structlog

from modules.orders.broadcast import OrderBroadcaster, broadcaster
from modules.orders.events import (
    BoxesChanged,
    ItemStatusUpdated,
    OrderCreated,
    OrderDeleted,
    OrderUpdated,
)
from shared.domain.bus import IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info(
            "order.event.created",
            order_id=str(event.aggregate_id),
            name=event.name,
            store=event.store_key,
            source=event.source,
        )


class ItemStatusUpdatedHandler(IEventHandler[ItemStatusUpdated]):
    def handle(self, event: ItemStatusUpdated) -> None:
        logger.info(
            "order.event.item_status_updated",
            order_id=str(event.aggregate_id),
            item_id=event.item_id,
            changes=event.changes,
            actor_role=event.actor_role,
        )
        if event.order_status != event.previous_order_status:
            logger.info(
                "order.event.status_changed",
                order_id=str(event.aggregate_id),
                old_status=event.previous_order_status,
                new_status=event.order_status,
            )


class LiveUpdateHandler(IEventHandler[DomainEvent]):
    """Forwards any order event to the live subscribers of that order."""

    def __init__(self, target: Optional[OrderBroadcaster] = None) -> None:
        self._broadcaster = target or broadcaster

    def handle(self, event: DomainEvent) -> None:
        delivered = self._broadcaster.publish(str(event.aggregate_id), event.to_dict())
        if delivered:
            logger.debug(
                "live_updates.published",
                order_id=str(event.aggregate_id),
                event=event.event_name,
                subscribers=delivered,
            )


LIVE_EVENTS = (OrderCreated, OrderUpdated, OrderDeleted, ItemStatusUpdated, BoxesChanged)

order_created_handler = OrderCreatedHandler()
item_status_updated_handler = ItemStatusUpdatedHandler()
live_update_handler = LiveUpdateHandler()
