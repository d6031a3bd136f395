"""Account domain exceptions.

Raised by the service layer; views translate them into HTTP responses.
"""

from __future__ import annotations


class UserNotFound(Exception):
    """The requested user does not exist."""


class UserAlreadyExists(Exception):
    """Another user is already registered with this email."""


class InvalidRole(ValueError):
    """A role string outside the closed ``Role`` set was supplied."""


class SelfModificationForbidden(Exception):
    """An administrator tried to delete or deactivate their own account."""
