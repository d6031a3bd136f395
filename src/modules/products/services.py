"""Product service layer (Use Cases).

Orchestrates the storefront catalog, delegating persistence to the
injected ``IProductRepository``.  Products arrive either from the
storefront sync (upsert on the storefront id) or from the admin console.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import structlog
from django.db import transaction
from django.db.models import QuerySet

from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import ProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: ProductDTO) -> Product:
        """Create a product from the admin console.

        Raises:
            ProductAlreadyExists: the storefront id is already catalogued.
        """
        log = logger.bind(store=dto.store_key.value, external_id=dto.external_id)
        if dto.external_id and self._repo.get_by_external_id(dto.external_id):
            log.warning("product.duplicate_external_id")
            raise ProductAlreadyExists(
                f"Product '{dto.external_id}' already exists."
            )
        product = self._repo.save(Product(**dto.as_record()))
        log.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def upsert_storefront_product(self, dto: ProductDTO) -> Tuple[Product, bool]:
        """Create or overwrite the product with ``dto.external_id``.

        Returns ``(product, created)``.  Every field is replaced with the
        storefront's current values.
        """
        product = self._repo.get_by_external_id(dto.external_id) if dto.external_id else None
        created = product is None
        if created:
            product = Product(**dto.as_record())
        else:
            for field, value in dto.as_record().items():
                setattr(product, field, value)
        product = self._repo.save(product)
        logger.info(
            "product.upserted",
            product_id=str(product.id),
            external_id=dto.external_id,
            created=created,
        )
        return product, created

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Raises ``ProductNotFound``."""
        product = self.get_product(id)
        for field, value in dto.changes().items():
            setattr(product, field, value)
        product = self._repo.save(product)
        logger.info("product.updated", product_id=str(id))
        return product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Raises ``ProductNotFound``."""
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product {id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Product]:
        return self._repo.list(filters)

    def get_product(self, id: str) -> Product:
        """Raises ``ProductNotFound``."""
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
