"""Django ORM implementation of the Product repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Returns ``None`` for non-existent or malformed IDs."""
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_external_id(self, external_id: str) -> Optional[Product]:
        return Product.objects.filter(external_id=str(external_id)).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Product]:
        """List products, most recently updated first.

        ``search`` matches the title case-insensitively; other keys are
        plain ORM lookups::

            {"store_key": "nl", "search": "plisse"}
        """
        queryset = Product.objects.order_by("-updated_at", "-id")
        if not filters:
            return queryset
        filters = dict(filters)
        search = filters.pop("search", None)
        if search:
            queryset = queryset.filter(title__icontains=search)
        return queryset.filter(**filters)

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        entity.save()
        logger.info(
            "product.saved",
            product_id=str(entity.id),
            external_id=entity.external_id,
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete a product; ``False`` when no product has that id."""
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        logger.info("product.deleted", product_id=str(id))
        return True
