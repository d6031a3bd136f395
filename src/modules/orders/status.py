"""Order status derivation and the line-item transition guard.

Both functions are pure: they read plain attributes (model instances, DTOs)
or mapping keys (dicts), never touch the database and never mutate their
arguments.  ``OrderService`` calls them on every line-item mutation.

Order status, in order of precedence:

* no items                              -> Pending
* every item quality-``Packed``         -> Completed
* every item Pending at all 3 stations  -> Pending
* anything else                         -> In Progress

Transition guard for one proposed line-item change:

1. Admins may change anything.
2. Once an item is ``Packed`` its frame and mesh statuses are frozen.
3. Quality may only move past ``Pending`` when frame and mesh are both
   ``Complete`` (the proposed value wins over the current one).
4. Everything else is accepted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from django.db import models

from modules.accounts.constants import Role, parse_role
from modules.orders.constants import (
    STATUS_FIELDS,
    CuttingStatus,
    OrderStatus,
    QualityStatus,
)


class RejectionReason(models.TextChoices):
    FROZEN_AFTER_PACKED = (
        "frozen_after_packed",
        "Cannot change frame/mesh status after the item is packed.",
    )
    CUTTING_NOT_COMPLETE = (
        "cutting_not_complete",
        "Quality requires frame and mesh cutting to be complete first.",
    )


@dataclass(frozen=True)
class TransitionDecision:
    accepted: bool
    reason: Optional[RejectionReason] = None

    @classmethod
    def accept(cls) -> TransitionDecision:
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectionReason) -> TransitionDecision:
        return cls(accepted=False, reason=reason)

    @property
    def code(self) -> str:
        return self.reason.value if self.reason else "accepted"

    @property
    def message(self) -> str:
        return str(self.reason.label) if self.reason else ""


def _read(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def derive_order_status(items: Iterable[Any]) -> OrderStatus:
    """Reduce line-item statuses to one order status (see module docstring)."""
    items = list(items)
    if not items:
        return OrderStatus.PENDING

    if all(_read(item, "quality_status") == QualityStatus.PACKED for item in items):
        return OrderStatus.COMPLETED

    if all(
        _read(item, field) == "Pending" for item in items for field in STATUS_FIELDS
    ):
        return OrderStatus.PENDING

    return OrderStatus.IN_PROGRESS


def check_item_transition(item: Any, change: Any, role: str | Role) -> TransitionDecision:
    """Decide whether *role* may apply *change* to *item*.

    *change* holds the proposed ``frame_cutting_status``,
    ``mesh_cutting_status`` and ``quality_status``; ``None`` (or a missing
    key) means the field is not part of the update.

    Raises:
        InvalidRole: *role* is not one of the known roles.
    """
    if parse_role(role).is_admin:
        return TransitionDecision.accept()

    proposed_frame = _read(change, "frame_cutting_status")
    proposed_mesh = _read(change, "mesh_cutting_status")
    proposed_quality = _read(change, "quality_status")

    if _read(item, "quality_status") == QualityStatus.PACKED and (
        proposed_frame is not None or proposed_mesh is not None
    ):
        return TransitionDecision.reject(RejectionReason.FROZEN_AFTER_PACKED)

    if proposed_quality is not None and proposed_quality != QualityStatus.PENDING:
        frame = proposed_frame if proposed_frame is not None else _read(item, "frame_cutting_status")
        mesh = proposed_mesh if proposed_mesh is not None else _read(item, "mesh_cutting_status")
        if frame != CuttingStatus.COMPLETE or mesh != CuttingStatus.COMPLETE:
            return TransitionDecision.reject(RejectionReason.CUTTING_NOT_COMPLETE)

    return TransitionDecision.accept()


def apply_item_change(item: Any, change: Any) -> List[str]:
    """Copy the proposed statuses onto *item*; return the fields that changed."""
    changed = []
    for field in STATUS_FIELDS:
        value = _read(change, field)
        if value is not None and getattr(item, field) != value:
            setattr(item, field, str(value))
            changed.append(field)
    return changed
