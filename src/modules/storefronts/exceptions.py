"""Storefront integration exceptions."""

from __future__ import annotations

from typing import Optional


class StoreNotConfigured(Exception):
    """The store has no shop domain or access token configured."""


class UnknownShopDomain(Exception):
    """A webhook came from a shop domain no store is configured for."""


class MissingWebhookHeaders(Exception):
    """The signature or shop-domain header is absent."""


class MissingWebhookSecret(Exception):
    """The store has no webhook signing secret configured."""


class InvalidWebhookSignature(Exception):
    """The webhook HMAC does not match the request body."""


class InvalidPayload(Exception):
    """The storefront sent an order payload that cannot be ingested."""


class ShopifyAPIError(Exception):
    """The Shopify Admin API answered with a non-2xx status or was unreachable."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
