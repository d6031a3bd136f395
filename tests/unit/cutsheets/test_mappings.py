"""Unit tests for storefront vocabulary mapping."""

from __future__ import annotations

import pytest

from modules.cutsheets.mappings import (
    FLAT_THRESHOLD,
    TABLES,
    FieldKind,
    extract_color_code,
    lookup,
    map_field,
    map_profile_color,
)
from modules.orders.constants import StoreKey

pytestmark = pytest.mark.unit


def test_every_field_has_a_table_for_every_store():
    for kind in FieldKind:
        assert set(TABLES[kind]) == set(StoreKey.values), kind


@pytest.mark.parametrize("store", ["nl", "NL", ".nl"])
def test_store_key_spellings(store):
    assert lookup("Plat", store, FieldKind.THRESHOLD) == FLAT_THRESHOLD


@pytest.mark.parametrize(
    "store, value, expected",
    [
        ("nl", "Magneet", "Miknatis"),
        ("de", "Bürste", "Firca"),
        ("dk", "Skruer", "Vida"),
        ("fr", "Pose en applique", "Cerceve uzeri"),
        ("uk", "Recess fit", "Cerceve ici"),
    ],
)
def test_map_field_turkish(store, value, expected):
    kinds = [kind for kind in FieldKind if value in TABLES[kind][store]]
    assert map_field(value, store, kinds[0]) == expected


def test_map_field_english():
    assert map_field("Verduisterend", "nl", FieldKind.CURTAIN, "en") == "Blackout"


@pytest.mark.parametrize("store", list(StoreKey.values))
def test_unknown_value_falls_back(store):
    for kind in FieldKind:
        assert map_field("Something else", store, kind) == "Something else"


def test_unknown_store_and_kind_fall_back():
    assert map_field("Plat", "be", FieldKind.THRESHOLD) == "Plat"
    assert lookup("Plat", "nl", "colour") is None


def test_value_from_other_store_not_mapped():
    assert map_field("Up-down", "nl", FieldKind.ORIENTATION) == "Up-down"


class TestProfileColor:
    def test_extract_code(self):
        assert extract_color_code("Antraciet RAL 7016") == "7016"
        assert extract_color_code("-") == "-"

    @pytest.mark.parametrize(
        "raw, tr, en",
        [
            ("White 9016", "Beyaz", "White"),
            ("RAL7016", "Antrasit", "Anthracite"),
            ("Zwart (9005)", "Siyah", "Black"),
            ("Bruin 8014", "Kahve", "Brown"),
        ],
    )
    def test_known_colors(self, raw, tr, en):
        assert map_profile_color(raw) == tr
        assert map_profile_color(raw, "en") == en

    def test_unknown_color_unchanged(self):
        assert map_profile_color("Gold 1036") == "Gold 1036"
