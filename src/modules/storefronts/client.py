"""Shopify Admin REST API client (httpx, synchronous).

Only the order and product listings the polling sync needs.  Pagination follows the
``Link: <...>; rel="next"`` header Shopify returns for cursor pages.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

import httpx
import structlog
from django.conf import settings

from modules.storefronts.exceptions import ShopifyAPIError
from modules.storefronts.stores import StoreConfig

logger = structlog.get_logger(__name__)

DEFAULT_ORDER_PARAMS = {"status": "any", "limit": 250}
DEFAULT_PRODUCT_PARAMS = {"limit": 250}


class ShopifyClient:
    def __init__(
        self,
        store: StoreConfig,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.store = store
        self.api_version = api_version or settings.SHOPIFY_API_VERSION
        self._client = httpx.Client(
            base_url=f"https://{store.shop}/admin/api/{self.api_version}/",
            headers={
                "X-Shopify-Access-Token": store.token,
                "Content-Type": "application/json",
            },
            timeout=timeout or settings.SHOPIFY_HTTP_TIMEOUT,
            transport=transport,
        )

    def __enter__(self) -> ShopifyClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        log = logger.bind(store=self.store.key, path=url)
        try:
            response = self._client.get(url, params=params)
        except httpx.TimeoutException as exc:
            log.warning("shopify.timeout")
            raise ShopifyAPIError(f"Shopify request timed out: {exc}") from exc
        except httpx.RequestError as exc:
            log.warning("shopify.unreachable", error=str(exc))
            raise ShopifyAPIError(f"Shopify unreachable: {exc}") from exc

        if not response.is_success:
            log.warning("shopify.error_response", status_code=response.status_code)
            raise ShopifyAPIError(
                f"Shopify error {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        return response

    def _paginate(
        self, resource: str, params: Dict[str, Any], max_pages: int
    ) -> Iterator[Dict[str, Any]]:
        url: Optional[str] = f"{resource}.json"
        query: Optional[Dict[str, Any]] = params
        pages = 0
        while url and pages < max_pages:
            response = self._get(url, params=query)
            pages += 1
            yield from response.json().get(resource, [])
            url = response.links.get("next", {}).get("url")
            # the next link already carries the cursor and limit
            query = None

    def iter_orders(
        self, params: Optional[Dict[str, Any]] = None, max_pages: int = 20
    ) -> Iterator[Dict[str, Any]]:
        """Yield raw order payloads page by page."""
        return self._paginate("orders", {**DEFAULT_ORDER_PARAMS, **(params or {})}, max_pages)

    def list_orders(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return list(self.iter_orders(params))

    def iter_products(
        self, params: Optional[Dict[str, Any]] = None, max_pages: int = 20
    ) -> Iterator[Dict[str, Any]]:
        """Yield raw product payloads page by page."""
        return self._paginate(
            "products", {**DEFAULT_PRODUCT_PARAMS, **(params or {})}, max_pages
        )

    def list_products(self, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return list(self.iter_products(params))
