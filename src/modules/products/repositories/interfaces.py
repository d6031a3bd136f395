"""Product repository interface.

Extends ``IRepository[Product]`` with the storefront-id look-up the
catalog sync uses to upsert.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products, most recently updated first."""

    @abstractmethod
    def get_by_external_id(self, external_id: str) -> Optional[Product]:
        """Retrieve a product by its storefront id."""
