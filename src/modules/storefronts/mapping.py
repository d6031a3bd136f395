"""Shopify payloads -> order and product DTOs.

Each storefront collects the screen configuration as line-item
properties named in its own language; the first property present wins.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from modules.orders.dtos import IngestOrderDTO, LineItemInputDTO
from modules.products.dtos import (
    ProductDTO,
    ProductImageDTO,
    ProductOptionDTO,
    ProductVariantDTO,
)
from modules.storefronts.exceptions import InvalidPayload

PROPERTY_NAMES: Dict[str, tuple[str, ...]] = {
    "width": ("Breedte in cm", "En", "Breite in cm", "Bredde i cm", "Largeur en cm"),
    "height": ("Hoogte in cm", "Boy", "Höhe in cm", "Højde i cm", "Hauteur en cm"),
    "profile_color": ("Profielkleur:", "Profil renk", "Profilfarbe", "Ramme farve"),
    "orientation": ("Schuifrichting", "Yon"),
    "installation_type": ("Plaatsing", "Kurulum"),
    "threshold_type": ("Dorpeltype", "Esik"),
    "mesh_type": ("Soort gaas", "Tul"),
    "curtain_type": ("Type plissé gordijn", "Kanat"),
    "fabric_color": ("Kleur plissé gordijn", "Kumas renk"),
    "closure_type": ("Sluiting", "Perde türü", "Kapatma"),
    "mounting_type": ("Montagewijze", "Montaj"),
}

DEFAULTS = {"width": "0", "height": "0", "profile_color": "-"}

LEADING_NUMBER = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)")


def _find_property(properties: List[Any], name: str) -> Any:
    for prop in properties:
        if isinstance(prop, Mapping) and prop.get("name") == name:
            return prop.get("value")
    return None


def get_property(properties: Any, names: Iterable[str], default: str = "") -> str:
    """Value of the first property called one of *names*.

    *names* are tried in order.  For each name only its first occurrence in
    *properties* counts; an empty value falls through to the next name.
    """
    if not isinstance(properties, list):
        return default
    for name in names:
        value = _find_property(properties, name)
        if value not in (None, ""):
            return str(value)
    return default


def parse_dimension(value: str) -> float:
    """Leading number of *value* (``"120 cm"`` -> 120.0); 0.0 when there is none."""
    match = LEADING_NUMBER.match(value or "")
    return float(match.group(0)) if match else 0.0


def line_item_to_dto(line_item: Mapping[str, Any], order_id: str, index: int) -> LineItemInputDTO:
    properties = line_item.get("properties") or []
    attributes = {
        field: get_property(properties, names, DEFAULTS.get(field, ""))
        for field, names in PROPERTY_NAMES.items()
    }
    item_id = line_item.get("id")
    return LineItemInputDTO(
        external_id=str(item_id) if item_id else f"{order_id}-{index + 1}",
        title=line_item.get("title") or "",
        sku=line_item.get("sku") or "",
        quantity=line_item.get("quantity") or 1,
        width=parse_dimension(attributes.pop("width")),
        height=parse_dimension(attributes.pop("height")),
        **attributes,
    )


def order_to_dto(payload: Mapping[str, Any], store_key: str) -> IngestOrderDTO:
    """Raises ``InvalidPayload`` when the order id is missing."""
    order_id = payload.get("id")
    if not order_id:
        raise InvalidPayload("Order payload has no id.")
    order_id = str(order_id)
    customer: Mapping[str, Any] = payload.get("customer") or {}
    line_items: List[Mapping[str, Any]] = payload.get("line_items") or []

    return IngestOrderDTO(
        store_key=store_key,
        external_id=order_id,
        name=payload.get("name") or f"#{order_id}",
        email=payload.get("email") or customer.get("email") or "",
        note=payload.get("note") or "",
        customer_first_name=customer.get("first_name") or "",
        customer_last_name=customer.get("last_name") or "",
        financial_status=payload.get("financial_status") or "",
        fulfillment_status=payload.get("fulfillment_status") or "",
        currency=payload.get("currency") or "",
        total_price=_optional(payload.get("total_price")),
        processed_at=_optional(payload.get("processed_at")),
        cancelled_at=_optional(payload.get("cancelled_at")),
        raw=dict(payload),
        items=[
            line_item_to_dto(line_item, order_id, index)
            for index, line_item in enumerate(line_items)
        ],
    )


def split_tags(value: Any) -> List[str]:
    """Shopify sends tags as one comma-separated string."""
    if isinstance(value, list):
        return [str(tag).strip() for tag in value if str(tag).strip()]
    if not value:
        return []
    return [tag.strip() for tag in str(value).split(",") if tag.strip()]


def product_to_dto(payload: Mapping[str, Any], store_key: str) -> ProductDTO:
    """Raises ``InvalidPayload`` when the product id is missing."""
    product_id = payload.get("id")
    if not product_id:
        raise InvalidPayload("Product payload has no id.")

    return ProductDTO(
        store_key=store_key,
        external_id=str(product_id),
        handle=payload.get("handle") or "",
        title=payload.get("title") or "",
        status=payload.get("status") or "",
        product_type=payload.get("product_type") or "",
        vendor=payload.get("vendor") or "",
        tags=split_tags(payload.get("tags")),
        images=[
            ProductImageDTO(
                id=str(image.get("id")), src=image.get("src") or "", alt=image.get("alt")
            )
            for image in payload.get("images") or []
        ],
        variants=[_variant_to_dto(variant) for variant in payload.get("variants") or []],
        options=[
            ProductOptionDTO(
                id=str(option.get("id")),
                name=option.get("name") or "",
                values=[str(v) for v in option.get("values") or []],
            )
            for option in payload.get("options") or []
        ],
        raw=dict(payload),
    )


def _variant_to_dto(variant: Mapping[str, Any]) -> ProductVariantDTO:
    return ProductVariantDTO(
        id=str(variant.get("id")),
        title=variant.get("title") or "",
        sku=variant.get("sku") or "",
        price=_optional_str(variant.get("price")),
        compare_at_price=_optional_str(variant.get("compare_at_price")),
        available=variant.get("available"),
        inventory_quantity=variant.get("inventory_quantity"),
        option1=variant.get("option1"),
        option2=variant.get("option2"),
        option3=variant.get("option3"),
    )


def _optional(value: Any) -> Optional[Any]:
    return value if value not in (None, "") else None


def _optional_str(value: Any) -> Optional[str]:
    value = _optional(value)
    return str(value) if value is not None else None
