"""Storefront product catalog.

Business rules implemented:
- ``external_id`` is the storefront's product id; it is unique when present
  and ``NULL`` for products entered by hand.
- Variants, images and options are kept as the storefront shapes them
  (JSON lists); the floor only reads them.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import StoreKey


class Product(BaseModel):
    """A product as listed on one storefront."""

    store_key: models.CharField = models.CharField(
        max_length=2, choices=StoreKey.choices
    )
    external_id: models.CharField = models.CharField(
        max_length=64, unique=True, null=True, blank=True
    )
    handle: models.CharField = models.CharField(max_length=255, blank=True, default="")
    title: models.CharField = models.CharField(max_length=255)
    status: models.CharField = models.CharField(max_length=32, blank=True, default="")
    product_type: models.CharField = models.CharField(
        max_length=255, blank=True, default=""
    )
    vendor: models.CharField = models.CharField(max_length=255, blank=True, default="")
    tags: models.JSONField = models.JSONField(default=list, blank=True)
    images: models.JSONField = models.JSONField(default=list, blank=True)
    variants: models.JSONField = models.JSONField(default=list, blank=True)
    options: models.JSONField = models.JSONField(default=list, blank=True)
    raw: models.JSONField = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "products"
        ordering = ["-updated_at", "-id"]
        indexes = [
            models.Index(fields=["store_key"], name="products_store_idx"),
            models.Index(fields=["handle"], name="products_handle_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.store_key})"
