"""Order repository interface.

Extends ``IRepository[Order]`` with the look-ups the Order aggregate
needs: external-id resolution for storefront re-syncs, row locking for
line-item mutations, and box persistence.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Box, LineItem, Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The aggregate includes its LineItem and Box children.
    """

    @abstractmethod
    def get_by_external_id(self, external_id: str) -> Optional[Order]:
        """Retrieve an order by its storefront id."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (``SELECT FOR UPDATE``)."""

    @abstractmethod
    def name_exists(
        self, name: str, store_key: str, exclude_id: Optional[str] = None
    ) -> bool:
        """Whether another order of *store_key* already uses *name*."""

    @abstractmethod
    def save_items(self, order: Order, items: Iterable[LineItem]) -> List[LineItem]:
        """Persist (create or update) line items of *order*."""

    @abstractmethod
    def delete_items(self, order: Order, keep_external_ids: Iterable[str]) -> int:
        """Delete the items of *order* whose external id is not kept."""

    @abstractmethod
    def get_item(self, order: Order, item_id: str) -> Optional[LineItem]:
        """Retrieve a line item by primary key or external id, locked for update."""

    @abstractmethod
    def get_box(self, order: Order, box_id: str) -> Optional[Box]:
        """Retrieve a box of *order*."""

    @abstractmethod
    def save_box(self, box: Box) -> Box:
        """Persist (create or update) a box."""

    @abstractmethod
    def delete_box(self, box: Box) -> None:
        """Remove a box."""

    @abstractmethod
    def list_boxes(self, order: Order) -> List[Box]:
        """All boxes of *order*, oldest first."""

    @abstractmethod
    def iter_all(self, chunk_size: int = 200) -> Iterable[Order]:
        """Every order with its line items, streamed in chunks."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Iterable[Order]:
        """List orders with optional filters."""
