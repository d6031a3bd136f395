"""Integration tests for the ``seed_users`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from modules.accounts.constants import Role
from modules.accounts.models import User

pytestmark = pytest.mark.integration


def _seed() -> str:
    out = StringIO()
    call_command("seed_users", stdout=out)
    return out.getvalue()


def test_creates_one_account_per_role():
    output = _seed()

    assert "created=4, skipped=0" in output
    assert set(User.objects.values_list("role", flat=True)) == {
        Role.ADMIN,
        Role.FRAME_CUTTING,
        Role.MESH_CUTTING,
        Role.QUALITY,
    }
    admin = User.objects.get(email="admin@company.com")
    assert admin.is_staff
    assert admin.check_password("admin123")


def test_second_run_skips_existing():
    _seed()
    output = _seed()

    assert "created=0, skipped=4" in output
    assert User.objects.count() == 4
