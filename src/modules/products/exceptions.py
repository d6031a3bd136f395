"""Product domain exceptions.

Raised by the Service Layer; the API layer translates them into HTTP
responses.
"""

from __future__ import annotations


class ProductAlreadyExists(Exception):
    """A product with the same storefront id already exists."""


class ProductNotFound(Exception):
    """The requested product does not exist."""
