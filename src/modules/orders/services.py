"""Order service layer (Use Cases).

Orchestrates order ingestion, manual entry, station status updates and
packaging.  All write operations are atomic; the service defines the
unit-of-work boundary.

Business rules enforced:
- Order status is re-derived from the line items after every item change.
- Non-admin station updates go through the transition guard; a rejection
  leaves the order untouched.
- Re-ingesting a storefront order never resets production progress: items
  that already exist keep their station statuses.
- Domain events are published only after the transaction commits.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import structlog
from django.db import transaction

from modules.orders.constants import STATUS_FIELDS, OrderSource
from modules.orders.events import (
    BoxesChanged,
    ItemStatusUpdated,
    OrderCreated,
    OrderDeleted,
    OrderUpdated,
)
from modules.orders.exceptions import (
    BoxNotFound,
    DuplicateOrder,
    LineItemNotFound,
    OrderNotFound,
    TransitionRejected,
    UnknownLineItems,
)
from modules.orders.models import Box, LineItem, Order
from modules.orders.status import (
    TransitionDecision,
    apply_item_change,
    check_item_transition,
    derive_order_status,
)
from shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.accounts.constants import Role
    from modules.orders.dtos import (
        BoxDTO,
        CreateOrderDTO,
        IngestOrderDTO,
        ItemStatusChangeDTO,
        LineItemInputDTO,
        UpdateBoxDTO,
        UpdateOrderDTO,
    )
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

ITEM_ATTRIBUTES = (
    "title",
    "sku",
    "quantity",
    "width",
    "height",
    "profile_color",
    "orientation",
    "installation_type",
    "threshold_type",
    "mesh_type",
    "curtain_type",
    "fabric_color",
    "closure_type",
    "mounting_type",
)

ORDER_ATTRIBUTES = (
    "name",
    "email",
    "note",
    "customer_first_name",
    "customer_last_name",
    "financial_status",
    "fulfillment_status",
    "currency",
    "total_price",
    "processed_at",
    "cancelled_at",
    "raw",
)


@dataclass
class ItemUpdateOutcome:
    order: Order
    item: LineItem
    decision: TransitionDecision
    changed_fields: List[str] = field(default_factory=list)


class OrderService:
    """Application service for Order use-cases.

    Receives the repository via constructor injection (DIP).
    """

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_manual_order(self, dto: CreateOrderDTO) -> Order:
        """Create an order typed in by an admin.

        Every item starts Pending at all three stations.  Items without an
        id get ``{order name}-{position}``.

        Raises:
            DuplicateOrder: the store already has an order with the requested name.
        """
        log = logger.bind(store=dto.store_key.value, source=OrderSource.MANUAL.value)
        if dto.name and self._order_repo.name_exists(dto.name, dto.store_key):
            log.warning("order.duplicate_name", name=dto.name)
            raise DuplicateOrder(
                f"Order '{dto.name}' already exists in store {dto.store_key.value}."
            )

        order = Order(
            store_key=dto.store_key,
            name=dto.name or "",
            email=dto.email,
            note=dto.note,
            customer_first_name=dto.customer_first_name,
            customer_last_name=dto.customer_last_name,
            source=OrderSource.MANUAL,
        )
        self._order_repo.save(order)

        items = [
            self._new_item(
                item_dto,
                position=index,
                external_id=item_dto.external_id or f"{order.name}-{index + 1}",
            )
            for index, item_dto in enumerate(dto.items)
        ]
        self._order_repo.save_items(order, items)
        order.status = derive_order_status(items)
        order.add_domain_event(
            OrderCreated(
                aggregate_id=order.id,
                name=order.name,
                store_key=order.store_key,
                source=order.source,
            )
        )
        self._order_repo.save(order)
        self._publish_after_commit(order)

        log.info("order.created", order_id=str(order.id), item_count=len(items))
        return self.get_order(str(order.id))

    @transaction.atomic
    def ingest_storefront_order(self, dto: IngestOrderDTO) -> Tuple[Order, bool]:
        """Insert or update a storefront order; returns ``(order, created)``.

        Existing line items keep their station statuses, new ones start
        Pending, items no longer on the storefront order are removed.

        Raises:
            DuplicateOrder: another order of the same store already uses
                the name.
        """
        log = logger.bind(store=dto.store_key.value, external_id=dto.external_id)
        order = self._order_repo.get_by_external_id(dto.external_id)
        created = order is None

        exclude_id = None if created else str(order.id)
        if self._order_repo.name_exists(dto.name, dto.store_key, exclude_id=exclude_id):
            log.warning("order.duplicate_name", name=dto.name)
            raise DuplicateOrder(
                f"Order '{dto.name}' already exists in store {dto.store_key.value}."
            )

        if created:
            order = Order(
                store_key=dto.store_key,
                external_id=dto.external_id,
                source=OrderSource.SHOPIFY,
            )
            existing_items: Dict[str, LineItem] = {}
        else:
            existing_items = {item.external_id: item for item in order.line_items.all()}

        for attr in ORDER_ATTRIBUTES:
            setattr(order, attr, getattr(dto, attr))
        order.store_key = dto.store_key
        self._order_repo.save(order)

        items = []
        for index, item_dto in enumerate(dto.items):
            item = existing_items.get(item_dto.external_id)
            if item is None:
                item = self._new_item(item_dto, position=index, external_id=item_dto.external_id)
            else:
                self._copy_attributes(item, item_dto)
                item.position = index
            items.append(item)

        self._order_repo.save_items(order, items)
        removed = self._order_repo.delete_items(order, [i.external_id for i in items])

        order.status = derive_order_status(items)
        if created:
            order.add_domain_event(
                OrderCreated(
                    aggregate_id=order.id,
                    name=order.name,
                    store_key=order.store_key,
                    source=order.source,
                )
            )
        else:
            order.add_domain_event(
                OrderUpdated(aggregate_id=order.id, status=order.status, fields=("items",))
            )
        self._order_repo.save(order)
        self._publish_after_commit(order)

        log.info(
            "order.ingested",
            order_id=str(order.id),
            created=created,
            item_count=len(items),
            removed_items=removed,
        )
        return self.get_order(str(order.id)), created

    @transaction.atomic
    def update_item_status(
        self,
        order_id: str,
        item_id: str,
        change: ItemStatusChangeDTO,
        role: str | Role,
    ) -> ItemUpdateOutcome:
        """Apply a station status change to one line item.

        Locks the order row, runs the transition guard for *role*, applies
        the change, re-derives the order status and saves both.

        Raises:
            OrderNotFound: order does not exist.
            LineItemNotFound: the order has no such item.
            TransitionRejected: the guard refused the change.
            InvalidRole: *role* is not a known role.
        """
        order = self._lock_order(order_id)
        item = self._order_repo.get_item(order, str(item_id))
        if not item:
            raise LineItemNotFound(f"Item {item_id} not found in order {order.name}.")

        log = logger.bind(
            order_id=str(order.id),
            item_id=item.external_id,
            role=str(role),
        )

        decision = check_item_transition(item, change, role)
        if not decision.accepted:
            log.warning("order.item_transition_rejected", reason=decision.code)
            raise TransitionRejected(decision)

        changed = apply_item_change(item, change)
        if changed:
            self._order_repo.save_items(order, [item])

        previous_status = order.status
        order.status = derive_order_status(order.line_items.all())
        if changed or order.status != previous_status:
            order.add_domain_event(
                ItemStatusUpdated(
                    aggregate_id=order.id,
                    item_id=item.external_id,
                    changes={name: getattr(item, name) for name in changed},
                    order_status=order.status,
                    previous_order_status=previous_status,
                    actor_role=str(role),
                )
            )
            self._order_repo.save(order)
            self._publish_after_commit(order)

        log.info(
            "order.item_status_updated",
            changed=changed,
            order_status=order.status,
        )
        return ItemUpdateOutcome(
            order=self.get_order(str(order.id)),
            item=item,
            decision=decision,
            changed_fields=changed,
        )

    @transaction.atomic
    def update_order(self, order_id: str, dto: UpdateOrderDTO) -> Order:
        """Admin direct write, ``status`` included.

        Raises:
            OrderNotFound: order does not exist.
        """
        order = self._lock_order(order_id)

        changes = dto.changes()
        for attr, value in changes.items():
            setattr(order, attr, value)
        order.add_domain_event(
            OrderUpdated(aggregate_id=order.id, status=order.status, fields=tuple(changes))
        )
        self._order_repo.save(order)
        self._publish_after_commit(order)

        logger.info("order.updated", order_id=str(order.id), fields=sorted(changes))
        return self.get_order(str(order.id))

    @transaction.atomic
    def delete_order(self, order_id: str) -> None:
        """Raises ``OrderNotFound`` when the order does not exist."""
        order = self.get_order(order_id)
        order.add_domain_event(OrderDeleted(aggregate_id=order.id, name=order.name))
        self._order_repo.delete(str(order.id))
        self._publish_after_commit(order)

    # ------------------------------------------------------------------
    # Boxes
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_box(self, order_id: str, dto: BoxDTO) -> Box:
        """Raises ``OrderNotFound`` or ``UnknownLineItems``."""
        order = self.get_order(order_id)
        self._check_item_ids(order, dto.item_ids)
        box = self._order_repo.save_box(
            Box(
                order=order,
                length=dto.length,
                width=dto.width,
                height=dto.height,
                weight=dto.weight,
                item_ids=list(dto.item_ids),
            )
        )
        self._box_event(order, box, "added")
        logger.info("order.box_added", order_id=str(order.id), box_id=str(box.id))
        return box

    @transaction.atomic
    def update_box(self, order_id: str, box_id: str, dto: UpdateBoxDTO) -> Box:
        order = self.get_order(order_id)
        box = self._get_box(order, box_id)
        changes = dto.changes()
        if "item_ids" in changes:
            self._check_item_ids(order, changes["item_ids"])
        for attr, value in changes.items():
            setattr(box, attr, value)
        self._order_repo.save_box(box)
        self._box_event(order, box, "updated")
        return box

    @transaction.atomic
    def remove_box(self, order_id: str, box_id: str) -> None:
        order = self.get_order(order_id)
        box = self._get_box(order, box_id)
        self._box_event(order, box, "removed")
        self._order_repo.delete_box(box)
        logger.info("order.box_removed", order_id=str(order.id), box_id=str(box_id))

    def list_boxes(self, order_id: str) -> List[Box]:
        return self._order_repo.list_boxes(self.get_order(order_id))

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def recompute_statuses(self) -> Tuple[int, int]:
        """Re-derive the status of every order; returns ``(updated, unchanged)``."""
        updated = unchanged = 0
        for order in self._order_repo.iter_all():
            status = derive_order_status(order.line_items.all())
            if status == order.status:
                unchanged += 1
                continue
            logger.info(
                "order.status_resynced",
                order_id=str(order.id),
                old_status=order.status,
                new_status=status,
            )
            order.status = status
            order.save(update_fields=["status"])
            updated += 1
        return updated, unchanged

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by primary key or storefront id.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(str(order_id))
        if order is None:
            order = self._order_repo.get_by_external_id(str(order_id))
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Order]:
        """Return orders, newest first, optionally filtered."""
        return self._order_repo.list(filters)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _copy_attributes(item: LineItem, dto: LineItemInputDTO) -> None:
        for attr in ITEM_ATTRIBUTES:
            setattr(item, attr, getattr(dto, attr))

    def _new_item(self, dto: LineItemInputDTO, position: int, external_id: str) -> LineItem:
        item = LineItem(external_id=external_id, position=position)
        self._copy_attributes(item, dto)
        for status_field in STATUS_FIELDS:
            setattr(item, status_field, "Pending")
        return item

    def _lock_order(self, order_id: str) -> Order:
        """Row-locked order, resolved by primary key or storefront id."""
        order = self._order_repo.get_for_update(str(self.get_order(order_id).id))
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def _get_box(self, order: Order, box_id: str) -> Box:
        box = self._order_repo.get_box(order, str(box_id))
        if box is None:
            raise BoxNotFound(f"Box {box_id} not found in order {order.name}.")
        return box

    @staticmethod
    def _check_item_ids(order: Order, item_ids: List[str]) -> None:
        known = {item.external_id for item in order.line_items.all()}
        unknown = sorted(set(item_ids) - known)
        if unknown:
            raise UnknownLineItems(
                f"Items not in order {order.name}: {', '.join(unknown)}."
            )

    def _box_event(self, order: Order, box: Box, action: str) -> None:
        order.add_domain_event(
            BoxesChanged(aggregate_id=order.id, box_id=str(box.id), action=action)
        )
        self._publish_after_commit(order)

    @staticmethod
    def _publish_after_commit(order: Order) -> None:
        events = order.domain_events
        order.clear_domain_events()
        for event in events:
            transaction.on_commit(
                lambda event=event: event_bus.publish(event), robust=True
            )
