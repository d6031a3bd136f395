"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF serializers, the
storefront mapper) and the Service layer.  DTOs are immutable
(``frozen=True``).

- ``LineItemInputDTO``: one screen as entered manually or mapped from a
  storefront line item.
- ``CreateOrderDTO``: manual order entry (admin console).
- ``IngestOrderDTO``: a storefront order to upsert.
- ``ItemStatusChangeDTO``: a partial station-status update.
- ``BoxDTO`` / ``UpdateBoxDTO``: packaging.
- ``UpdateOrderDTO``: admin direct write.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.orders.constants import (
    MAX_DIMENSION_CM,
    MIN_DIMENSION_CM,
    CuttingStatus,
    OrderStatus,
    QualityStatus,
    StoreKey,
)


def normalize_store_key(value: Any) -> Any:
    """Accept ``"nl"``, ``"NL"`` or ``".nl"`` for the Netherlands store."""
    if isinstance(value, str):
        return value.strip().lstrip(".").lower()
    return value


# ---------------------------------------------------------------------------
# Line items
# ---------------------------------------------------------------------------


class LineItemInputDTO(BaseModel):
    """Immutable DTO for a single screen.

    Categorical attributes are kept as the storefront sent them; only the
    cut-sheet calculator translates them.
    """

    model_config = ConfigDict(frozen=True)

    external_id: Optional[str] = None
    title: str = ""
    sku: str = ""
    quantity: int = 1
    width: float = 0.0
    height: float = 0.0
    profile_color: str = "-"
    orientation: str = ""
    installation_type: str = ""
    threshold_type: str = ""
    mesh_type: str = ""
    curtain_type: str = ""
    fabric_color: str = ""
    closure_type: str = ""
    mounting_type: str = ""

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


def _check_dimensions(item: LineItemInputDTO) -> None:
    for name in ("width", "height"):
        value = getattr(item, name)
        if not MIN_DIMENSION_CM <= value <= MAX_DIMENSION_CM:
            raise ValueError(
                f"{name.capitalize()} must be between {MIN_DIMENSION_CM} "
                f"and {MAX_DIMENSION_CM} cm."
            )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


class CreateOrderDTO(BaseModel):
    """Immutable DTO for manual order entry.

    Validates:
    - ``items`` must contain at least one item.
    - Every item is between 10 and 500 cm wide and high.
    """

    model_config = ConfigDict(frozen=True)

    store_key: StoreKey
    name: Optional[str] = None
    email: str = ""
    customer_first_name: str = ""
    customer_last_name: str = ""
    note: str = ""
    items: List[LineItemInputDTO]

    @field_validator("store_key", mode="before")
    @classmethod
    def store_key_normalized(cls, v: Any) -> Any:
        return normalize_store_key(v)

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[LineItemInputDTO]
    ) -> List[LineItemInputDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        for item in v:
            _check_dimensions(item)
        return v


class IngestOrderDTO(BaseModel):
    """Immutable DTO for a storefront order (webhook or polling sync).

    Line items are matched on ``external_id`` when the order is re-ingested.
    """

    model_config = ConfigDict(frozen=True)

    store_key: StoreKey
    external_id: str
    name: str
    email: str = ""
    note: str = ""
    customer_first_name: str = ""
    customer_last_name: str = ""
    financial_status: str = ""
    fulfillment_status: str = ""
    currency: str = ""
    total_price: Optional[Decimal] = None
    processed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    raw: Dict[str, Any] = Field(default_factory=dict)
    items: List[LineItemInputDTO] = Field(default_factory=list)

    @field_validator("store_key", mode="before")
    @classmethod
    def store_key_normalized(cls, v: Any) -> Any:
        return normalize_store_key(v)

    @model_validator(mode="after")
    def items_have_external_ids(self):
        ids = [item.external_id for item in self.items]
        if any(not item_id for item_id in ids):
            raise ValueError("Storefront line items must carry an external id.")
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate line item ids in the same order.")
        return self


class UpdateOrderDTO(BaseModel):
    """Admin direct write; ``None`` means "leave unchanged".

    ``status`` bypasses derivation on purpose and is overwritten again by
    the next line-item mutation.
    """

    model_config = ConfigDict(frozen=True)

    status: Optional[OrderStatus] = None
    note: Optional[str] = None
    email: Optional[str] = None
    customer_first_name: Optional[str] = None
    customer_last_name: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Station status
# ---------------------------------------------------------------------------


class ItemStatusChangeDTO(BaseModel):
    """Partial update of one line item's station statuses."""

    model_config = ConfigDict(frozen=True)

    frame_cutting_status: Optional[CuttingStatus] = None
    mesh_cutting_status: Optional[CuttingStatus] = None
    quality_status: Optional[QualityStatus] = None

    @model_validator(mode="after")
    def at_least_one_status(self):
        if (
            self.frame_cutting_status is None
            and self.mesh_cutting_status is None
            and self.quality_status is None
        ):
            raise ValueError("At least one status field is required.")
        return self


# ---------------------------------------------------------------------------
# Boxes
# ---------------------------------------------------------------------------


class BoxDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: float = Field(gt=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    weight: float = Field(gt=0)
    item_ids: List[str] = Field(default_factory=list)


class UpdateBoxDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: Optional[float] = Field(default=None, gt=0)
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    weight: Optional[float] = Field(default=None, gt=0)
    item_ids: Optional[List[str]] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
