"""Order domain exceptions.

Raised by the service layer when an order, item or box cannot be found or
a requested change is refused.  The API layer translates them into HTTP
responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modules.orders.status import TransitionDecision


class OrderNotFound(Exception):
    """The requested order does not exist."""


class LineItemNotFound(Exception):
    """The order has no line item with the requested id."""


class BoxNotFound(Exception):
    """The order has no box with the requested id."""


class UnknownLineItems(Exception):
    """A box references line items that are not part of the order."""


class DuplicateOrder(Exception):
    """An order with the same external id or name already exists."""


class TransitionRejected(Exception):
    """The transition guard refused a line-item status change.

    Carries the guard's ``TransitionDecision`` so callers can report the
    stable reason code alongside the human-readable message.
    """

    def __init__(self, decision: TransitionDecision) -> None:
        super().__init__(decision.message)
        self.decision = decision

    @property
    def code(self) -> str:
        return self.decision.code
