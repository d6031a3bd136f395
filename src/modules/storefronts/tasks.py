"""Celery tasks for the storefront integration."""

import structlog
from celery import shared_task

from modules.storefronts.services import build_sync_service

logger = structlog.get_logger(__name__)


@shared_task(name="storefronts.sync_orders")
def sync_orders(store: str):
    """Polls one storefront for products and orders; scheduled per store by beat."""
    result = build_sync_service().sync_store(store)
    logger.info("sync_orders.executed", **result.as_dict())
    return result.as_dict()
