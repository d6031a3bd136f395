"""Storefront intake: order webhook pushes and the polling sync of
orders and the product catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import structlog
from pydantic import ValidationError as PydanticValidationError

from modules.orders.exceptions import DuplicateOrder
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.storefronts.client import ShopifyClient
from modules.storefronts.exceptions import InvalidPayload
from modules.storefronts.mapping import order_to_dto, product_to_dto
from modules.storefronts.stores import StoreConfig, configured_store

logger = structlog.get_logger(__name__)

ClientFactory = Callable[[StoreConfig], ShopifyClient]


@dataclass
class SyncCounts:
    fetched: int = 0
    created: int = 0
    updated: int = 0
    failed: List[str] = field(default_factory=list)

    def record(self, created: bool) -> None:
        if created:
            self.created += 1
        else:
            self.updated += 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            "fetched": self.fetched,
            "created": self.created,
            "updated": self.updated,
            "failed": len(self.failed),
        }


@dataclass
class SyncResult(SyncCounts):
    """Order counts at the top level, catalog counts under ``products``."""

    store: str = ""
    products: SyncCounts = field(default_factory=SyncCounts)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "store": self.store,
            **super().as_dict(),
            "products": self.products.as_dict(),
        }


class StorefrontSyncService:
    """Feeds storefront orders into ``OrderService`` and products into
    ``ProductService``.

    *client_factory* builds the API client for one store; tests pass a
    factory backed by ``httpx.MockTransport``.  Without a
    *product_service* the sync leaves the catalog alone.
    """

    def __init__(
        self,
        order_service: OrderService,
        client_factory: Optional[ClientFactory] = None,
        product_service: Optional[ProductService] = None,
    ) -> None:
        self._orders = order_service
        self._products = product_service
        self._client_factory = client_factory or ShopifyClient

    def ingest_payload(self, payload: Mapping[str, Any], store_key: str) -> Tuple[Order, bool]:
        """Map and upsert one storefront order.

        Raises:
            InvalidPayload: the payload is not an order or fails validation.
            DuplicateOrder: a different order already uses the name.
        """
        if not isinstance(payload, Mapping):
            raise InvalidPayload("Order payload must be a JSON object.")
        try:
            dto = order_to_dto(payload, store_key)
        except PydanticValidationError as exc:
            raise InvalidPayload(str(exc)) from exc
        return self._orders.ingest_storefront_order(dto)

    def ingest_product(self, payload: Mapping[str, Any], store_key: str) -> Tuple[Product, bool]:
        """Map and upsert one storefront product.

        Raises:
            InvalidPayload: the payload is not a product or fails validation.
        """
        if self._products is None:
            raise RuntimeError("StorefrontSyncService was built without a product service.")
        if not isinstance(payload, Mapping):
            raise InvalidPayload("Product payload must be a JSON object.")
        try:
            dto = product_to_dto(payload, store_key)
        except PydanticValidationError as exc:
            raise InvalidPayload(str(exc)) from exc
        return self._products.upsert_storefront_product(dto)

    def sync_store(self, store: str, params: Optional[Dict[str, Any]] = None) -> SyncResult:
        """Pull the store's products and recent orders and upsert each.

        *params* narrows the order listing only.  A bad product or order
        is logged and counted; the rest still syncs.  API failures
        propagate as ``ShopifyAPIError``.
        """
        config = configured_store(store)
        result = SyncResult(store=config.key)
        log = logger.bind(store=config.key)
        log.info("storefront.sync_started")

        with self._client_factory(config) as client:
            products = client.list_products() if self._products is not None else []
            payloads = client.list_orders(params)

        for payload in products:
            result.products.fetched += 1
            try:
                _, created = self.ingest_product(payload, config.key)
            except InvalidPayload as exc:
                result.products.failed.append(str(payload.get("id", "?")))
                log.warning(
                    "storefront.product_skipped",
                    external_id=payload.get("id"),
                    error=str(exc),
                )
                continue
            result.products.record(created)

        for payload in payloads:
            result.fetched += 1
            try:
                _, created = self.ingest_payload(payload, config.key)
            except (InvalidPayload, DuplicateOrder) as exc:
                result.failed.append(str(payload.get("id", "?")))
                log.warning(
                    "storefront.order_skipped",
                    external_id=payload.get("id"),
                    error=str(exc),
                )
                continue
            result.record(created)

        log.info("storefront.sync_completed", **result.as_dict())
        return result


def build_sync_service() -> StorefrontSyncService:
    """The sync wired to the Django repositories."""
    return StorefrontSyncService(
        OrderService(order_repository=OrderDjangoRepository()),
        product_service=ProductService(repository=ProductDjangoRepository()),
    )
