"""Domain events for the Orders bounded context.

Published on the in-process bus once the write they describe has been
committed; subscribers include the audit logger and the live-update
broadcaster.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderCreated(DomainEvent):
    """Raised when an order is created (manual entry or first ingestion)."""

    name: str
    store_key: str
    source: str


@dataclass(frozen=True, kw_only=True)
class OrderUpdated(DomainEvent):
    """Raised when an order is re-ingested or written directly by an admin."""

    status: str
    fields: Tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class OrderDeleted(DomainEvent):
    """Raised when an admin deletes an order."""

    name: str


@dataclass(frozen=True, kw_only=True)
class ItemStatusUpdated(DomainEvent):
    """Raised when a station status change on a line item was accepted."""

    item_id: str
    changes: Dict[str, str] = field(default_factory=dict)
    order_status: str
    previous_order_status: str
    actor_role: str


@dataclass(frozen=True, kw_only=True)
class BoxesChanged(DomainEvent):
    """Raised when a box is added, edited or removed."""

    box_id: str
    action: str
