"""Per-store Shopify credentials from ``settings.SHOPIFY_STORES``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from modules.orders.constants import StoreKey
from modules.orders.dtos import normalize_store_key
from modules.storefronts.exceptions import StoreNotConfigured


@dataclass(frozen=True)
class StoreConfig:
    key: str
    shop: str
    token: str
    secret: str

    @property
    def is_configured(self) -> bool:
        return bool(self.shop and self.token)


def store_config(store: str) -> StoreConfig:
    """Credentials for *store*; raises ``StoreNotConfigured`` for unknown keys."""
    key = normalize_store_key(store)
    if key not in StoreKey.values:
        raise StoreNotConfigured(f"Unknown store '{store}'.")
    raw = settings.SHOPIFY_STORES.get(key, {})
    return StoreConfig(
        key=key,
        shop=raw.get("shop", ""),
        token=raw.get("token", ""),
        secret=raw.get("secret", ""),
    )


def configured_store(store: str) -> StoreConfig:
    """Like ``store_config`` but also requires a shop domain and token."""
    config = store_config(store)
    if not config.is_configured:
        raise StoreNotConfigured(f"Missing Shopify credentials for store '{config.key}'.")
    return config


def store_for_shop_domain(shop_domain: str) -> Optional[StoreConfig]:
    """The store whose configured shop domain appears in *shop_domain*.

    Stores without a shop domain never match.
    """
    domain = (shop_domain or "").strip().lower()
    if not domain:
        return None
    for key in StoreKey.values:
        config = store_config(key)
        if config.shop and config.shop.lower() in domain:
            return config
    return None
