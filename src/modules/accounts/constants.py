"""Staff roles.

The role set is closed: every role-dependent behaviour (which station view
a user sees, whether the transition guard applies) is expressed as a lookup
keyed by ``Role`` and tests assert each table covers every member, so adding
a role fails loudly until each table has an entry.
"""

from __future__ import annotations

from django.db import models

from modules.accounts.exceptions import InvalidRole


class Role(models.TextChoices):
    ADMIN = "Admin", "Admin"
    FRAME_CUTTING = "Frame Cutting", "Frame Cutting"
    MESH_CUTTING = "Mesh Cutting", "Mesh Cutting"
    QUALITY = "Quality", "Quality"

    @property
    def is_admin(self) -> bool:
        return self is Role.ADMIN


def parse_role(value: str | Role) -> Role:
    """Return the ``Role`` for *value* or raise ``InvalidRole``."""
    try:
        return Role(value)
    except ValueError as exc:
        raise InvalidRole(f"Unknown role {value!r}.") from exc


ACTIVE_FILTERS: dict[str, bool | None] = {
    "active": True,
    "inactive": False,
    "all": None,
}
