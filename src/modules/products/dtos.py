"""Product DTOs for the Service Layer.

Pydantic v2, immutable (``frozen=True``).

- ``ProductDTO``: a product to create, either entered in the admin
  console or mapped from a storefront payload for an upsert.
- ``UpdateProductDTO``: partial admin edit.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.orders.constants import StoreKey
from modules.orders.dtos import normalize_store_key


class ProductImageDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    src: str = ""
    alt: Optional[str] = None


class ProductVariantDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    sku: str = ""
    price: Optional[str] = None
    compare_at_price: Optional[str] = None
    available: Optional[bool] = None
    inventory_quantity: Optional[int] = None
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None


class ProductOptionDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    values: List[str] = Field(default_factory=list)


class ProductDTO(BaseModel):
    """Immutable DTO for a product to create or upsert."""

    model_config = ConfigDict(frozen=True)

    store_key: StoreKey
    title: str
    external_id: Optional[str] = None
    handle: str = ""
    status: str = ""
    product_type: str = ""
    vendor: str = ""
    tags: List[str] = Field(default_factory=list)
    images: List[ProductImageDTO] = Field(default_factory=list)
    variants: List[ProductVariantDTO] = Field(default_factory=list)
    options: List[ProductOptionDTO] = Field(default_factory=list)
    raw: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("store_key", mode="before")
    @classmethod
    def store_key_normalized(cls, v: Any) -> Any:
        return normalize_store_key(v)

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Title must not be empty.")
        return v.strip()

    def as_record(self) -> Dict[str, Any]:
        """Model field values, nested DTOs dumped to plain JSON."""
        return self.model_dump(mode="json")


class UpdateProductDTO(BaseModel):
    """Admin edit; ``None`` means "leave unchanged"."""

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    handle: Optional[str] = None
    status: Optional[str] = None
    product_type: Optional[str] = None
    vendor: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Title must not be empty.")
        return v.strip() if v is not None else v

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
