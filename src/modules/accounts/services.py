"""User management service (admin console use cases)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.db import transaction

from modules.accounts.constants import ACTIVE_FILTERS
from modules.accounts.exceptions import (
    SelfModificationForbidden,
    UserAlreadyExists,
    UserNotFound,
)
from modules.accounts.models import User

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.accounts.dtos import CreateUserDTO, UpdateUserDTO
    from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserService:
    """Application service for staff accounts.

    Authorisation (admin-only) is enforced by the API layer; the service
    only guards against an administrator locking themselves out.
    """

    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_user(self, dto: CreateUserDTO) -> User:
        """Raises ``UserAlreadyExists`` when the email is taken."""
        log = logger.bind(email=dto.email, role=dto.role)
        if self._repo.get_by_email(dto.email):
            log.warning("user.duplicate_email")
            raise UserAlreadyExists(f"User with email '{dto.email}' already exists.")

        user = User(
            email=dto.email,
            name=dto.name,
            role=dto.role,
            is_active=dto.is_active,
        )
        user.set_password(dto.password)
        user = self._repo.save(user)
        log.info("user.registered", user_id=str(user.id))
        return user

    @transaction.atomic
    def update_user(self, id: str, dto: UpdateUserDTO, actor_id: Optional[str] = None) -> User:
        """Apply the non-``None`` fields of *dto*.

        Raises:
            UserNotFound: the user does not exist.
            SelfModificationForbidden: *actor_id* tries to deactivate itself.
        """
        user = self.get_user(id)
        if dto.is_active is False and actor_id and str(user.id) == str(actor_id):
            raise SelfModificationForbidden("You cannot deactivate your own account.")

        for field in ("name", "role", "is_active"):
            value = getattr(dto, field)
            if value is not None:
                setattr(user, field, value)
        if dto.password is not None:
            user.set_password(dto.password)

        user = self._repo.save(user)
        logger.info("user.updated", user_id=str(user.id), role=user.role)
        return user

    @transaction.atomic
    def delete_user(self, id: str, actor_id: Optional[str] = None) -> None:
        user = self.get_user(id)
        if actor_id and str(user.id) == str(actor_id):
            raise SelfModificationForbidden("You cannot delete your own account.")
        self._repo.delete(str(user.id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_user(self, id: str) -> User:
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound(f"User {id} not found.")
        return user

    def list_users(self, status: str = "all") -> QuerySet[User]:
        """List users filtered by ``active`` / ``inactive`` / ``all``.

        Unknown status values behave like ``all``.
        """
        is_active = ACTIVE_FILTERS.get(status)
        filters = None if is_active is None else {"is_active": is_active}
        return self._repo.list(filters)
