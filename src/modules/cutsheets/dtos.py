"""Cut-sheet output DTOs (Pydantic v2, immutable).

Measurements are centimetres.  Cut sheets are computed on request and
never stored.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class FrameCutDTO(BaseModel):
    """Frame saw measurements (``En`` / ``Boy`` / ``Kanat``)."""

    model_config = ConfigDict(frozen=True)

    en: float
    boy: float
    kanat: float
    flat_value: Optional[float] = None


class MeshCutDTO(BaseModel):
    """Mesh table measurements; the strip lengths only exist on production sheets."""

    model_config = ConfigDict(frozen=True)

    pleat_count: float
    mesh_length: float
    cord_length: float
    strip_channel: Optional[float] = None
    strip_sash: Optional[float] = None


class CutSheetDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: str
    position: int
    purpose: str
    language: str
    width: float
    height: float
    vertical: bool
    flat_threshold: bool
    labels: Dict[str, str]
    frame: Optional[FrameCutDTO] = None
    mesh: Optional[MeshCutDTO] = None
