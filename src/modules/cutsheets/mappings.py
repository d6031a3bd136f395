"""Storefront attribute vocabularies mapped to production labels.

Every regional storefront spells the same product options in its own
language.  The shop floor reads Turkish labels (``tr``); the English
labels (``en``) are used by the admin console.  A value a table does not
know is returned unchanged so legacy or hand-typed options still show up
on the cut sheet.
"""

from __future__ import annotations

import re
from typing import Dict, NamedTuple

from django.db import models

DEFAULT_LANGUAGE = "tr"


class Label(NamedTuple):
    tr: str
    en: str


class FieldKind(models.TextChoices):
    ORIENTATION = "orientation", "Orientation"
    INSTALLATION = "installation", "Installation"
    THRESHOLD = "threshold", "Threshold"
    MESH = "mesh", "Mesh"
    CURTAIN = "curtain", "Curtain"
    CLOSURE = "closure", "Closure"
    MOUNTING = "mounting", "Mounting"


VERTICAL = Label("Dikey", "Vertical")
HORIZONTAL = Label("Yatay", "Horizontal")
INSIDE_FRAME = Label("Cerceve ici", "Inside frame")
ON_FRAME = Label("Cerceve uzeri", "On frame")
STANDARD_THRESHOLD = Label("35 mm", "Standard threshold")
FLAT_THRESHOLD = Label("9 mm", "Flat threshold")
STANDARD_MESH = Label("Standart", "Standard")
POLLEN_MESH = Label("Polen", "Pollen")
SEMI_TRANSPARENT = Label("Transparan", "Semi-transparent")
BLACKOUT = Label("Karartma", "Blackout")
BRUSH = Label("Firca", "Brush")
MAGNET = Label("Miknatis", "Magnet")
SCREW = Label("Vida", "Screw")
TAPE = Label("Bant", "Tape")

Table = Dict[str, Dict[str, Label]]

ORIENTATION: Table = {
    "nl": {"Verticaal": VERTICAL, "Horizontaal": HORIZONTAL},
    "de": {"Vertical": VERTICAL, "Horizontal": HORIZONTAL},
    "dk": {"Vertikal": VERTICAL, "Sidelæns": HORIZONTAL},
    "fr": {"Latéral": VERTICAL, "Haut-bas": HORIZONTAL},
    "uk": {"Up-down": VERTICAL, "Sideways": HORIZONTAL},
}

INSTALLATION: Table = {
    "nl": {"In het kozijn": INSIDE_FRAME, "Op het kozijn": ON_FRAME},
    "de": {"In der Fensternische": INSIDE_FRAME, "Auf dem Rahmen": ON_FRAME},
    "dk": {"Indvendig": INSIDE_FRAME, "Udvendig": ON_FRAME},
    "fr": {"Pose en tunnel": INSIDE_FRAME, "Pose en applique": ON_FRAME},
    "uk": {"Recess fit": INSIDE_FRAME, "Face fit": ON_FRAME},
}

THRESHOLD: Table = {
    "nl": {"Standaard": STANDARD_THRESHOLD, "Plat": FLAT_THRESHOLD},
    "de": {"Standard": STANDARD_THRESHOLD, "Flaches": FLAT_THRESHOLD},
    "dk": {"Standard": STANDARD_THRESHOLD, "Flad": FLAT_THRESHOLD},
    "fr": {"Standard": STANDARD_THRESHOLD, "Plat": FLAT_THRESHOLD},
    "uk": {"Standard": STANDARD_THRESHOLD, "Flat": FLAT_THRESHOLD},
}

MESH: Table = {
    "nl": {"Standaard": STANDARD_MESH, "Anti-pollen": POLLEN_MESH},
    "de": {"Standard": STANDARD_MESH, "Pollenschutz": POLLEN_MESH},
    "dk": {"Standard": STANDARD_MESH, "Pollenafvisende": POLLEN_MESH},
    "fr": {"Standard": STANDARD_MESH, "Pollen": POLLEN_MESH},
    "uk": {"Standard": STANDARD_MESH, "Pollen": POLLEN_MESH},
}

CURTAIN: Table = {
    "nl": {"Semi-transparant": SEMI_TRANSPARENT, "Verduisterend": BLACKOUT},
    "de": {"Halbtransparent": SEMI_TRANSPARENT, "Verdunkelung": BLACKOUT},
    "dk": {"Semi-gennemsigtig": SEMI_TRANSPARENT, "Mørklægningsgardin": BLACKOUT},
    "fr": {"Translucide": SEMI_TRANSPARENT, "Blackout": BLACKOUT},
    "uk": {"Translucent": SEMI_TRANSPARENT, "Blackout": BLACKOUT},
}

CLOSURE: Table = {
    "nl": {"Borstel": BRUSH, "Magneet": MAGNET},
    "de": {"Bürste": BRUSH, "Magnet": MAGNET},
    "dk": {"Børste": BRUSH, "Magnet": MAGNET},
    "fr": {"Brosse": BRUSH, "Aimant": MAGNET},
    "uk": {"Brush": BRUSH, "Magnet": MAGNET},
}

MOUNTING: Table = {
    "nl": {"Schroefmontage": SCREW, "Plakmontage": TAPE},
    "de": {"Schrauben": SCREW, "Klebeband": TAPE},
    "dk": {"Skruer": SCREW, "Tape": TAPE},
    "fr": {"Vis": SCREW, "Ruban": TAPE},
    "uk": {"Screws": SCREW, "Tape": TAPE},
}

TABLES: Dict[FieldKind, Table] = {
    FieldKind.ORIENTATION: ORIENTATION,
    FieldKind.INSTALLATION: INSTALLATION,
    FieldKind.THRESHOLD: THRESHOLD,
    FieldKind.MESH: MESH,
    FieldKind.CURTAIN: CURTAIN,
    FieldKind.CLOSURE: CLOSURE,
    FieldKind.MOUNTING: MOUNTING,
}

PROFILE_COLORS: Dict[str, Label] = {
    "9016": Label("Beyaz", "White"),
    "7016": Label("Antrasit", "Anthracite"),
    "9005": Label("Siyah", "Black"),
    "8014": Label("Kahve", "Brown"),
}

COLOR_CODE_PATTERN = re.compile(r"\d{4}")


def _store(store: str) -> str:
    return str(store or "").strip().lstrip(".").lower()


def _pick(label: Label, language: str) -> str:
    return label.en if language == "en" else label.tr


def lookup(value: str, store: str, kind: FieldKind | str) -> Label | None:
    """The ``Label`` for *value* in *store*'s table, ``None`` when unknown."""
    try:
        table = TABLES[FieldKind(kind)]
    except ValueError:
        return None
    return table.get(_store(store), {}).get(value)


def map_field(value: str, store: str, kind: FieldKind | str, language: str = DEFAULT_LANGUAGE) -> str:
    """Production label for a storefront option, or *value* itself when unknown."""
    label = lookup(value, store, kind)
    return _pick(label, language) if label else value


def extract_color_code(profile_color: str) -> str:
    """First 4-digit RAL code in *profile_color* (``"White 9016"`` -> ``"9016"``)."""
    match = COLOR_CODE_PATTERN.search(profile_color or "")
    return match.group(0) if match else profile_color


def map_profile_color(profile_color: str, language: str = DEFAULT_LANGUAGE) -> str:
    label = PROFILE_COLORS.get(extract_color_code(profile_color))
    return _pick(label, language) if label else profile_color
