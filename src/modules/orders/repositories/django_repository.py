"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Line-item
mutations lock the parent order row with ``select_for_update()`` so two
stations updating the same order cannot lose each other's write when the
order status is re-derived.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q, QuerySet

from modules.orders.models import Box, LineItem, Order
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _queryset(self) -> QuerySet[Order]:
        return Order.objects.prefetch_related("line_items", "boxes")

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with prefetched items and boxes.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return self._queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_external_id(self, external_id: str) -> Optional[Order]:
        return self._queryset().filter(external_id=str(external_id)).first()

    def get_for_update(self, id: str) -> Optional[Order]:
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Order]:
        """List orders, newest first.

        Supported filter keys are plain ORM lookups plus ``search``, which
        matches the order name, email or customer name.
        """
        queryset = self._queryset().order_by("-created_at", "-id")
        if not filters:
            return queryset
        filters = dict(filters)
        search = filters.pop("search", None)
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search)
                | Q(email__icontains=search)
                | Q(customer_first_name__icontains=search)
                | Q(customer_last_name__icontains=search)
            )
        return queryset.filter(**filters)

    def name_exists(
        self, name: str, store_key: str, exclude_id: Optional[str] = None
    ) -> bool:
        queryset = Order.objects.filter(name=name, store_key=store_key)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()

    def iter_all(self, chunk_size: int = 200) -> Iterator[Order]:
        return (
            Order.objects.prefetch_related("line_items")
            .order_by("created_at")
            .iterator(chunk_size=chunk_size)
        )

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    def save(self, entity: Order) -> Order:
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete an order; items and boxes cascade."""
        deleted, _ = Order.objects.filter(id=id).delete()
        if deleted:
            logger.info("order.deleted", order_id=str(id))
        return bool(deleted)

    # ------------------------------------------------------------------
    # Line items
    # ------------------------------------------------------------------

    def save_items(self, order: Order, items: Iterable[LineItem]) -> List[LineItem]:
        saved = []
        for item in items:
            item.order = order
            item.save()
            saved.append(item)
        return saved

    def delete_items(self, order: Order, keep_external_ids: Iterable[str]) -> int:
        deleted, _ = (
            LineItem.objects.filter(order=order)
            .exclude(external_id__in=list(keep_external_ids))
            .delete()
        )
        return deleted

    def get_item(self, order: Order, item_id: str) -> Optional[LineItem]:
        queryset = LineItem.objects.select_for_update().filter(order=order)
        item = queryset.filter(external_id=str(item_id)).first()
        if item is not None:
            return item
        try:
            return queryset.filter(id=item_id).first()
        except (ValueError, ValidationError):
            return None

    # ------------------------------------------------------------------
    # Boxes
    # ------------------------------------------------------------------

    def get_box(self, order: Order, box_id: str) -> Optional[Box]:
        try:
            return Box.objects.filter(order=order, id=box_id).first()
        except (ValueError, ValidationError):
            return None

    def save_box(self, box: Box) -> Box:
        box.save()
        return box

    def delete_box(self, box: Box) -> None:
        box.delete()

    def list_boxes(self, order: Order) -> List[Box]:
        return list(Box.objects.filter(order=order).order_by("created_at"))
