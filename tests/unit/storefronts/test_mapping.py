"""Unit tests for Shopify payload mapping."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.constants import StoreKey
from modules.storefronts.exceptions import InvalidPayload
from modules.storefronts.mapping import (
    get_property,
    order_to_dto,
    parse_dimension,
    product_to_dto,
    split_tags,
)

pytestmark = pytest.mark.unit


def _payload(**overrides):
    payload = {
        "id": 820982911946154508,
        "name": "#1001",
        "email": "jan@example.nl",
        "note": "Achterdeur",
        "financial_status": "paid",
        "fulfillment_status": None,
        "currency": "EUR",
        "total_price": "249.95",
        "processed_at": "2024-05-01T10:15:00+02:00",
        "cancelled_at": None,
        "customer": {"first_name": "Jan", "last_name": "de Vries"},
        "line_items": [
            {
                "id": 466157049,
                "title": "Plissé hordeur",
                "sku": "PH-01",
                "quantity": 2,
                "properties": [
                    {"name": "Breedte in cm", "value": "120"},
                    {"name": "Hoogte in cm", "value": "210.5 cm"},
                    {"name": "Profielkleur:", "value": "Wit 9016"},
                    {"name": "Schuifrichting", "value": "Horizontaal"},
                    {"name": "Dorpeltype", "value": "Plat"},
                    {"name": "Soort gaas", "value": "Standaard"},
                    {"name": "Sluiting", "value": "Magneet"},
                ],
            }
        ],
    }
    payload.update(overrides)
    return payload


class TestGetProperty:
    def test_first_non_empty_name_wins(self):
        props = [{"name": "En", "value": ""}, {"name": "Breite in cm", "value": "90"}]
        assert get_property(props, ("Breedte in cm", "En", "Breite in cm")) == "90"

    def test_duplicated_name_keeps_first_occurrence(self):
        props = [
            {"name": "Breedte in cm", "value": "120"},
            {"name": "Breedte in cm", "value": "999"},
        ]
        assert get_property(props, ("Breedte in cm",)) == "120"

    def test_empty_first_occurrence_falls_through_to_next_name(self):
        props = [
            {"name": "Breedte in cm", "value": ""},
            {"name": "Breedte in cm", "value": "130"},
            {"name": "En", "value": "95"},
        ]
        assert get_property(props, ("Breedte in cm", "En")) == "95"

    def test_ignores_malformed_entries(self):
        props = ["Breedte in cm", {"name": "Breedte in cm", "value": "80"}]
        assert get_property(props, ("Breedte in cm",)) == "80"

    def test_default_when_missing(self):
        assert get_property([], ("En",), "0") == "0"
        assert get_property(None, ("En",), "-") == "-"

    @pytest.mark.parametrize(
        "raw, expected", [("120", 120.0), ("85.5cm", 85.5), (" 90 ", 90.0), ("abc", 0.0), ("", 0.0)]
    )
    def test_parse_dimension(self, raw, expected):
        assert parse_dimension(raw) == expected


class TestOrderToDto:
    def test_maps_order_and_items(self):
        dto = order_to_dto(_payload(), ".NL")

        assert dto.store_key == StoreKey.NL
        assert dto.external_id == "820982911946154508"
        assert dto.name == "#1001"
        assert dto.customer_first_name == "Jan"
        assert dto.customer_last_name == "de Vries"
        assert dto.fulfillment_status == ""
        assert dto.total_price == Decimal("249.95")
        assert dto.processed_at.year == 2024
        assert dto.cancelled_at is None
        assert dto.raw["id"] == 820982911946154508

        item = dto.items[0]
        assert item.external_id == "466157049"
        assert item.quantity == 2
        assert item.width == 120.0
        assert item.height == 210.5
        assert item.profile_color == "Wit 9016"
        assert item.threshold_type == "Plat"
        assert item.closure_type == "Magneet"
        assert item.curtain_type == ""

    def test_german_and_turkish_property_names(self):
        payload = _payload(
            line_items=[
                {
                    "id": 1,
                    "properties": [
                        {"name": "Breite in cm", "value": "100"},
                        {"name": "Boy", "value": "180"},
                        {"name": "Profilfarbe", "value": "Anthrazit 7016"},
                        {"name": "Perde türü", "value": "Bürste"},
                    ],
                }
            ]
        )
        item = order_to_dto(payload, "de").items[0]
        assert (item.width, item.height) == (100.0, 180.0)
        assert item.profile_color == "Anthrazit 7016"
        assert item.closure_type == "Bürste"

    def test_defaults_for_missing_properties(self):
        item = order_to_dto(_payload(line_items=[{"id": 5}]), "uk").items[0]
        assert item.width == 0.0
        assert item.height == 0.0
        assert item.profile_color == "-"
        assert item.quantity == 1

    def test_line_items_without_id_get_positional_ids(self):
        dto = order_to_dto(_payload(line_items=[{}, {}]), "nl")
        assert [item.external_id for item in dto.items] == [
            "820982911946154508-1",
            "820982911946154508-2",
        ]

    def test_missing_order_id(self):
        with pytest.raises(InvalidPayload):
            order_to_dto(_payload(id=None), "nl")

    def test_missing_name_uses_id(self):
        assert order_to_dto(_payload(name=None), "nl").name == "#820982911946154508"


class TestProductToDto:
    PAYLOAD = {
        "id": 632910392,
        "handle": "plisse-hordeur",
        "title": "Plissé hordeur",
        "status": "active",
        "product_type": "Hordeur",
        "vendor": "Flyscreen",
        "tags": "deur, plissé ,,maatwerk",
        "images": [{"id": 850703190, "src": "https://cdn.example/p.jpg", "alt": None}],
        "variants": [
            {
                "id": 808950810,
                "title": "Wit",
                "sku": "PH-W",
                "price": 129.95,
                "compare_at_price": "",
                "inventory_quantity": 4,
                "option1": "Wit",
            }
        ],
        "options": [{"id": 594680422, "name": "Kleur", "values": ["Wit", "Zwart"]}],
    }

    def test_maps_storefront_shape(self):
        dto = product_to_dto(self.PAYLOAD, ".NL")

        assert dto.store_key == StoreKey.NL
        assert dto.external_id == "632910392"
        assert dto.tags == ["deur", "plissé", "maatwerk"]
        assert dto.images[0].id == "850703190"
        variant = dto.variants[0]
        assert (variant.id, variant.price, variant.compare_at_price) == ("808950810", "129.95", None)
        assert variant.inventory_quantity == 4
        assert dto.options[0].values == ["Wit", "Zwart"]
        assert dto.raw["handle"] == "plisse-hordeur"

    def test_fields_are_plain_json(self):
        fields = product_to_dto(self.PAYLOAD, "nl").as_record()
        assert fields["store_key"] == "nl"
        assert fields["variants"][0]["sku"] == "PH-W"

    def test_missing_product_id(self):
        with pytest.raises(InvalidPayload):
            product_to_dto({**self.PAYLOAD, "id": None}, "nl")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, []), ("", []), ("a,b", ["a", "b"]), (" a , ,b ", ["a", "b"]), (["a", " "], ["a"])],
    )
    def test_split_tags(self, value, expected):
        assert split_tags(value) == expected
