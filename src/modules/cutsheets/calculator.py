"""Cut-sheet calculator.

Turns one line item's dimensions (cm) and storefront options into the
measurements the frame saw and the mesh table work from.  Two formula
sets exist and are kept apart on purpose:

* ``production``: the station screens.  Width and height swap for
  vertical screens and a flat threshold changes the sash (``Kanat``).
* ``report``: the exported order sheets.  Fixed allowances, no swap, no
  threshold branch.

Every function here is pure and accepts model instances, DTOs or plain
mappings.  Unknown options never raise; they pass through unchanged.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from django.db import models

from modules.cutsheets.dtos import CutSheetDTO, FrameCutDTO, MeshCutDTO
from modules.cutsheets.mappings import (
    DEFAULT_LANGUAGE,
    FLAT_THRESHOLD,
    VERTICAL,
    FieldKind,
    extract_color_code,
    lookup,
    map_field,
    map_profile_color,
)
from modules.cutsheets.stations import Station

VERTICAL_SPELLINGS = ("vertical", "verticaal", "vertikal", "up-down", "latéral")
FLAT_SPELLINGS = ("plat", "flat", "flad", "flaches")


class Purpose(models.TextChoices):
    PRODUCTION = "production", "Production"
    REPORT = "report", "Report"


def _attr(item: Any, name: str, default: Any = None) -> Any:
    if isinstance(item, Mapping):
        value = item.get(name, default)
    else:
        value = getattr(item, name, default)
    return default if value is None else value


def _dimensions(item: Any) -> tuple[float, float]:
    return float(_attr(item, "width", 0.0)), float(_attr(item, "height", 0.0))


def is_vertical(item: Any, store: str) -> bool:
    raw = str(_attr(item, "orientation", ""))
    if lookup(raw, store, FieldKind.ORIENTATION) == VERTICAL:
        return True
    lowered = raw.lower()
    return any(spelling in lowered for spelling in VERTICAL_SPELLINGS)


def is_flat_threshold(item: Any, store: str) -> bool:
    raw = str(_attr(item, "threshold_type", ""))
    if lookup(raw, store, FieldKind.THRESHOLD) == FLAT_THRESHOLD:
        return True
    lowered = raw.lower()
    return any(spelling in lowered for spelling in FLAT_SPELLINGS)


# ---------------------------------------------------------------------------
# Frame
# ---------------------------------------------------------------------------


def frame_cut_production_formula(item: Any, store: str) -> FrameCutDTO:
    width, height = _dimensions(item)
    vertical = is_vertical(item, store)
    flat = is_flat_threshold(item, store)
    return FrameCutDTO(
        en=(height if vertical else width) - 7,
        boy=(width if vertical else height) - 7,
        kanat=height - 4.9 if flat else height - 7.7,
        flat_value=round(width - 3.4, 1) if flat else None,
    )


def frame_cut_report_formula(item: Any, store: str) -> FrameCutDTO:
    width, height = _dimensions(item)
    return FrameCutDTO(en=width - 5, boy=height - 5, kanat=height - 5.5)


# ---------------------------------------------------------------------------
# Mesh
# ---------------------------------------------------------------------------


def mesh_cut_production_formula(item: Any, store: str) -> MeshCutDTO:
    width, height = _dimensions(item)
    vertical = is_vertical(item, store)
    mesh_length = (width if vertical else height) - 4.2
    kanat = frame_cut_production_formula(item, store).kanat
    return MeshCutDTO(
        pleat_count=(height if vertical else width) / 2,
        mesh_length=mesh_length,
        cord_length=width + height + 20,
        strip_channel=mesh_length - 2,
        strip_sash=kanat - 1,
    )


def mesh_cut_report_formula(item: Any, store: str) -> MeshCutDTO:
    width, height = _dimensions(item)
    return MeshCutDTO(
        pleat_count=width / 2,
        mesh_length=height - 4.2,
        cord_length=width + height + 20,
    )


FORMULAS = {
    Purpose.PRODUCTION: (frame_cut_production_formula, mesh_cut_production_formula),
    Purpose.REPORT: (frame_cut_report_formula, mesh_cut_report_formula),
}


# ---------------------------------------------------------------------------
# Sheet
# ---------------------------------------------------------------------------


def item_labels(
    item: Any, store: str, purpose: Purpose = Purpose.PRODUCTION, language: str = DEFAULT_LANGUAGE
) -> dict[str, str]:
    """Production-vocabulary labels for every option of *item*.

    Report sheets print the bare RAL code instead of the colour name.
    """
    profile_color = str(_attr(item, "profile_color", "-"))
    if purpose == Purpose.REPORT:
        color = extract_color_code(profile_color)
    else:
        color = map_profile_color(profile_color, language)

    def mapped(attr: str, kind: FieldKind) -> str:
        return map_field(str(_attr(item, attr, "")), store, kind, language)

    return {
        "profile_color": color,
        "orientation": mapped("orientation", FieldKind.ORIENTATION),
        "installation": mapped("installation_type", FieldKind.INSTALLATION),
        "threshold": mapped("threshold_type", FieldKind.THRESHOLD),
        "mesh": mapped("mesh_type", FieldKind.MESH),
        "curtain": mapped("curtain_type", FieldKind.CURTAIN),
        "fabric_color": str(_attr(item, "fabric_color", "")),
        "closure": mapped("closure_type", FieldKind.CLOSURE),
        "mounting": mapped("mounting_type", FieldKind.MOUNTING),
    }


def build_cut_sheet(
    item: Any,
    store: str,
    purpose: Purpose | str = Purpose.PRODUCTION,
    language: str = DEFAULT_LANGUAGE,
    stations: Optional[Iterable[Station | str]] = None,
) -> CutSheetDTO:
    """Cut sheet for one line item.

    *purpose* picks the formula set.  *stations* limits the measurement
    sections included (all of them when ``None``).

    Raises:
        ValueError: *purpose* is not ``production`` or ``report``.
    """
    purpose = Purpose(purpose)
    wanted = set(Station) if stations is None else {Station(s) for s in stations}
    frame_formula, mesh_formula = FORMULAS[purpose]
    width, height = _dimensions(item)

    return CutSheetDTO(
        item_id=str(_attr(item, "external_id", "")),
        position=int(_attr(item, "position", 0)),
        purpose=purpose.value,
        language=language,
        width=width,
        height=height,
        vertical=is_vertical(item, store),
        flat_threshold=is_flat_threshold(item, store),
        labels=item_labels(item, store, purpose, language),
        frame=frame_formula(item, store) if Station.FRAME in wanted else None,
        mesh=mesh_formula(item, store) if Station.MESH in wanted else None,
    )
