"""Order, LineItem and Box models.

Business rules implemented:
- An order's ``status`` is never edited by station staff; it is re-derived
  from its line items on every item mutation (see ``modules.orders.status``).
- ``external_id`` is the storefront's order id; it is unique when present
  and ``NULL`` for manually entered orders.
- Line items keep their storefront id so a re-sync can match them and
  preserve the production statuses already recorded.
- Deleting an order hard-deletes its line items and boxes (CASCADE).
"""

from __future__ import annotations

import secrets
from typing import Any

import structlog
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.orders.constants import (
    ORDER_NUMBER_MAX_RETRIES,
    CuttingStatus,
    OrderSource,
    OrderStatus,
    QualityStatus,
    StoreKey,
)
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root.

    ``name`` is the human-readable order number shown on the floor
    (``#1001`` for storefront orders).  Every storefront numbers its own
    orders, so a name is only unique within its ``store_key``.  Manual orders without a name get
    one generated on first save (format: ``M-YYYYMMDD-XXXXXX``).
    """

    store_key: models.CharField = models.CharField(
        max_length=2, choices=StoreKey.choices
    )
    external_id: models.CharField = models.CharField(
        max_length=64, unique=True, null=True, blank=True
    )
    name: models.CharField = models.CharField(max_length=64)
    email: models.EmailField = models.EmailField(blank=True, default="")
    note: models.TextField = models.TextField(blank=True, default="")
    customer_first_name: models.CharField = models.CharField(
        max_length=150, blank=True, default=""
    )
    customer_last_name: models.CharField = models.CharField(
        max_length=150, blank=True, default=""
    )
    financial_status: models.CharField = models.CharField(
        max_length=32, blank=True, default=""
    )
    fulfillment_status: models.CharField = models.CharField(
        max_length=32, blank=True, default=""
    )
    currency: models.CharField = models.CharField(max_length=3, blank=True, default="")
    total_price: models.DecimalField = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    processed_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    cancelled_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    raw: models.JSONField = models.JSONField(default=dict, blank=True)
    source: models.CharField = models.CharField(
        max_length=10,
        choices=OrderSource.choices,
        default=OrderSource.SHOPIFY,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["store_key"], name="orders_store_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["store_key", "name"],
                name="orders_unique_store_name",
            ),
        ]

    @property
    def customer_name(self) -> str:
        return f"{self.customer_first_name} {self.customer_last_name}".strip()

    @staticmethod
    def generate_order_name() -> str:
        """Generate a manual order number: ``M-YYYYMMDD-XXXXXX``."""
        now = timezone.now()
        suffix = secrets.token_hex(3).upper()
        return f"M-{now:%Y%m%d}-{suffix}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.name:
            for _ in range(ORDER_NUMBER_MAX_RETRIES):
                candidate = self.generate_order_name()
                if not Order.objects.filter(name=candidate).exists():
                    self.name = candidate
                    break
            else:
                raise RuntimeError(
                    f"Failed to generate unique order name after "
                    f"{ORDER_NUMBER_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} ({self.status})"


class LineItem(BaseModel):
    """One fly screen to produce.

    Width and height are in centimetres.  The categorical attributes hold
    the raw storefront labels (``Verticaal``, ``Plat`` ...); translation to
    production labels happens only when a cut sheet is built.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="line_items",
    )
    external_id: models.CharField = models.CharField(max_length=64)
    title: models.CharField = models.CharField(max_length=255, blank=True, default="")
    sku: models.CharField = models.CharField(max_length=64, blank=True, default="")
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1, validators=[MinValueValidator(1)]
    )
    position: models.PositiveIntegerField = models.PositiveIntegerField(default=0)

    width: models.FloatField = models.FloatField(default=0.0)
    height: models.FloatField = models.FloatField(default=0.0)
    profile_color: models.CharField = models.CharField(max_length=64, default="-")
    orientation: models.CharField = models.CharField(max_length=64, blank=True, default="")
    installation_type: models.CharField = models.CharField(
        max_length=64, blank=True, default=""
    )
    threshold_type: models.CharField = models.CharField(
        max_length=64, blank=True, default=""
    )
    mesh_type: models.CharField = models.CharField(max_length=64, blank=True, default="")
    curtain_type: models.CharField = models.CharField(
        max_length=64, blank=True, default=""
    )
    fabric_color: models.CharField = models.CharField(
        max_length=64, blank=True, default=""
    )
    closure_type: models.CharField = models.CharField(
        max_length=64, blank=True, default=""
    )
    mounting_type: models.CharField = models.CharField(
        max_length=64, blank=True, default=""
    )

    frame_cutting_status: models.CharField = models.CharField(
        max_length=20,
        choices=CuttingStatus.choices,
        default=CuttingStatus.PENDING,
    )
    mesh_cutting_status: models.CharField = models.CharField(
        max_length=20,
        choices=CuttingStatus.choices,
        default=CuttingStatus.PENDING,
    )
    quality_status: models.CharField = models.CharField(
        max_length=20,
        choices=QualityStatus.choices,
        default=QualityStatus.PENDING,
    )

    class Meta:
        db_table = "order_line_items"
        ordering = ["position", "created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "external_id"],
                name="line_items_unique_external_id",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.external_id} {self.width:g}x{self.height:g}"


class Box(BaseModel):
    """A shipping box packed for an order.

    ``item_ids`` lists the line-item external ids placed in the box.  An
    item may appear in more than one box.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="boxes",
    )
    length: models.FloatField = models.FloatField()
    width: models.FloatField = models.FloatField()
    height: models.FloatField = models.FloatField()
    weight: models.FloatField = models.FloatField()
    item_ids: models.JSONField = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "order_boxes"
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"Box {self.length:g}x{self.width:g}x{self.height:g} ({self.weight:g} kg)"
