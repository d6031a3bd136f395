"""Unit tests for UserService and the User model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.accounts.constants import Role, parse_role
from modules.accounts.dtos import CreateUserDTO, UpdateUserDTO
from modules.accounts.exceptions import (
    InvalidRole,
    SelfModificationForbidden,
    UserAlreadyExists,
    UserNotFound,
)
from modules.accounts.models import User
from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.services import UserService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return UserService(repository=UserDjangoRepository())


def _create_dto(**overrides):
    values = {
        "email": "New.Cutter@Example.com",
        "password": "cutter123",
        "name": "New Cutter",
        "role": "Frame Cutting",
    }
    values.update(overrides)
    return CreateUserDTO(**values)


class TestRoles:
    def test_parse_role(self):
        assert parse_role("Quality") is Role.QUALITY

    def test_parse_unknown_role(self):
        with pytest.raises(InvalidRole):
            parse_role("Packer")

    def test_is_staff_follows_role(self, admin, quality_inspector):
        assert admin.is_staff and admin.is_admin
        assert not quality_inspector.is_staff


class TestCreateUser:
    def test_creates_with_hashed_password(self, service):
        user = service.create_user(_create_dto())

        assert user.email == "new.cutter@example.com"
        assert user.role == Role.FRAME_CUTTING
        assert user.check_password("cutter123")

    def test_duplicate_email(self, service):
        service.create_user(_create_dto())
        with pytest.raises(UserAlreadyExists):
            service.create_user(_create_dto(email="new.cutter@example.com"))

    def test_short_password(self):
        with pytest.raises(ValidationError, match="at least 6"):
            _create_dto(password="abc")

    def test_unknown_role(self):
        with pytest.raises(ValidationError):
            _create_dto(role="Driver")


class TestUpdateAndDelete:
    def test_update_role_and_password(self, service, quality_inspector):
        user = service.update_user(
            str(quality_inspector.id), UpdateUserDTO(role=Role.ADMIN, password="newpass1")
        )
        assert user.role == Role.ADMIN
        assert user.is_staff
        assert user.check_password("newpass1")

    def test_cannot_deactivate_self(self, service, admin):
        with pytest.raises(SelfModificationForbidden):
            service.update_user(str(admin.id), UpdateUserDTO(is_active=False), actor_id=str(admin.id))

    def test_cannot_delete_self(self, service, admin):
        with pytest.raises(SelfModificationForbidden):
            service.delete_user(str(admin.id), actor_id=str(admin.id))

    def test_delete(self, service, admin, mesh_cutter):
        service.delete_user(str(mesh_cutter.id), actor_id=str(admin.id))
        assert not User.objects.filter(id=mesh_cutter.id).exists()

    def test_unknown_user(self, service):
        with pytest.raises(UserNotFound):
            service.get_user("00000000-0000-0000-0000-000000000000")


class TestListUsers:
    def test_filters_by_active_flag(self, service, admin, frame_cutter):
        frame_cutter.is_active = False
        frame_cutter.save()

        assert list(service.list_users("active")) == [admin]
        assert list(service.list_users("inactive")) == [frame_cutter]
        assert set(service.list_users("whatever")) == {admin, frame_cutter}
