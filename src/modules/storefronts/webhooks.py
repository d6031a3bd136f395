"""Shopify webhook signature verification.

Shopify signs every webhook with the app's shared secret: the
``X-Shopify-Hmac-Sha256`` header is the base64 HMAC-SHA256 of the raw
request body.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Mapping

import structlog

from modules.storefronts.exceptions import (
    InvalidWebhookSignature,
    MissingWebhookHeaders,
    MissingWebhookSecret,
    UnknownShopDomain,
)
from modules.storefronts.stores import StoreConfig, store_for_shop_domain

logger = structlog.get_logger(__name__)

HMAC_HEADER = "X-Shopify-Hmac-Sha256"
SHOP_DOMAIN_HEADER = "X-Shopify-Shop-Domain"
TOPIC_HEADER = "X-Shopify-Topic"


def compute_hmac(body: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(body: bytes, signature: str, secret: str) -> bool:
    """Constant-time comparison of *signature* against the body's HMAC."""
    return hmac.compare_digest(compute_hmac(body, secret), signature or "")


def authenticate_webhook(headers: Mapping[str, str], body: bytes) -> StoreConfig:
    """Resolve and authenticate the store that sent a webhook.

    Raises:
        MissingWebhookHeaders: signature or shop-domain header absent.
        UnknownShopDomain: no store is configured for the shop domain.
        MissingWebhookSecret: the store has no signing secret.
        InvalidWebhookSignature: the HMAC does not match.
    """
    signature = headers.get(HMAC_HEADER)
    shop_domain = headers.get(SHOP_DOMAIN_HEADER)
    if not signature or not shop_domain:
        raise MissingWebhookHeaders("Missing required headers.")

    log = logger.bind(shop_domain=shop_domain, topic=headers.get(TOPIC_HEADER))

    store = store_for_shop_domain(shop_domain)
    if store is None:
        log.warning("webhook.unknown_shop")
        raise UnknownShopDomain(f"Unknown shop domain: {shop_domain}")

    if not store.secret:
        log.error("webhook.missing_secret", store=store.key)
        raise MissingWebhookSecret(f"Missing webhook secret for store '{store.key}'.")

    if not verify_signature(body, signature, store.secret):
        log.warning("webhook.invalid_signature", store=store.key)
        raise InvalidWebhookSignature("Invalid signature.")

    return store
