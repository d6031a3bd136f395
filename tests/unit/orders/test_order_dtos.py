"""Unit tests for Order DTOs (Pydantic validation)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.orders.constants import StoreKey
from modules.orders.dtos import (
    BoxDTO,
    CreateOrderDTO,
    IngestOrderDTO,
    ItemStatusChangeDTO,
    LineItemInputDTO,
    UpdateBoxDTO,
    UpdateOrderDTO,
    normalize_store_key,
)

pytestmark = pytest.mark.unit


def _screen(**overrides):
    values = {"width": 120, "height": 180}
    values.update(overrides)
    return LineItemInputDTO(**values)


class TestStoreKey:
    @pytest.mark.parametrize("raw", ["nl", "NL", ".nl", " .Nl "])
    def test_store_key_spellings(self, raw):
        assert normalize_store_key(raw) == "nl"
        dto = CreateOrderDTO(store_key=raw, items=[_screen()])
        assert dto.store_key == StoreKey.NL

    def test_unknown_store_rejected(self):
        with pytest.raises(ValidationError):
            CreateOrderDTO(store_key="be", items=[_screen()])


class TestCreateOrderDTO:
    def test_requires_items(self):
        with pytest.raises(ValidationError, match="at least one item"):
            CreateOrderDTO(store_key="nl", items=[])

    @pytest.mark.parametrize("width", [9.9, 500.1])
    def test_dimension_bounds(self, width):
        with pytest.raises(ValidationError, match="between 10 and 500"):
            CreateOrderDTO(store_key="nl", items=[_screen(width=width)])

    def test_bounds_inclusive(self):
        dto = CreateOrderDTO(store_key="de", items=[_screen(width=10, height=500)])
        assert dto.items[0].width == 10

    def test_is_frozen(self):
        dto = CreateOrderDTO(store_key="nl", items=[_screen()])
        with pytest.raises(ValidationError):
            dto.note = "changed"

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError, match="at least 1"):
            _screen(quantity=0)


class TestIngestOrderDTO:
    def test_items_need_external_ids(self):
        with pytest.raises(ValidationError, match="external id"):
            IngestOrderDTO(store_key="nl", external_id="1", name="#1", items=[_screen()])

    def test_duplicate_item_ids_rejected(self):
        items = [_screen(external_id="a"), _screen(external_id="a")]
        with pytest.raises(ValidationError, match="Duplicate"):
            IngestOrderDTO(store_key="nl", external_id="1", name="#1", items=items)

    def test_storefront_items_skip_dimension_bounds(self):
        dto = IngestOrderDTO(
            store_key="uk",
            external_id="1",
            name="#1",
            items=[_screen(external_id="a", width=0, height=0)],
        )
        assert dto.items[0].width == 0


class TestStatusAndBoxDTOs:
    def test_status_change_needs_a_field(self):
        with pytest.raises(ValidationError, match="At least one status"):
            ItemStatusChangeDTO()

    def test_status_change_rejects_unknown_value(self):
        with pytest.raises(ValidationError):
            ItemStatusChangeDTO(quality_status="Shipped")

    def test_box_dimensions_positive(self):
        with pytest.raises(ValidationError):
            BoxDTO(length=0, width=10, height=10, weight=1)

    def test_partial_dtos_report_changes(self):
        assert UpdateBoxDTO(weight=2.5).changes() == {"weight": 2.5}
        assert UpdateOrderDTO(note="rush").changes() == {"note": "rush"}
