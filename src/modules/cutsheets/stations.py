"""Which production stations each role sees on a cut sheet.

``STATION_VIEWS`` has an entry for every ``Role``; a role missing from it
is a programming error and raises ``KeyError``.
"""

from __future__ import annotations

from typing import Dict, FrozenSet

from django.db import models

from modules.accounts.constants import Role, parse_role


class Station(models.TextChoices):
    FRAME = "frame", "Frame cutting"
    MESH = "mesh", "Mesh cutting"


STATION_VIEWS: Dict[Role, FrozenSet[Station]] = {
    Role.ADMIN: frozenset({Station.FRAME, Station.MESH}),
    Role.FRAME_CUTTING: frozenset({Station.FRAME}),
    Role.MESH_CUTTING: frozenset({Station.MESH}),
    Role.QUALITY: frozenset({Station.FRAME, Station.MESH}),
}


def stations_for(role: str | Role) -> FrozenSet[Station]:
    """Raises ``InvalidRole`` for an unknown role."""
    return STATION_VIEWS[parse_role(role)]
