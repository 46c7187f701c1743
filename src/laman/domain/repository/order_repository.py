"""Abstract repository for Order aggregate.

The order, its items, its delivery and its payment are written through
one call so implementations can commit them as a single unit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from laman.domain.model.order import Order, OrderAggregate, OrderStatus, OrderWithItems


class OrderRepository(ABC):

    @abstractmethod
    def add(self, aggregate: OrderAggregate) -> None:
        """Persist a new order with its items, delivery and payment.

        Either all four records become visible or none do.
        Raises PersistenceError when the write fails.
        """

    @abstractmethod
    def get_by_id(self, order_id: UUID) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_with_items(self, order_id: UUID) -> OrderWithItems | None:
        """Return the order and its items (creation order), or None."""

    @abstractmethod
    def list_by_user(self, user_id: UUID) -> list[Order]:
        """Return the user's orders, newest first."""

    @abstractmethod
    def update_status(
        self,
        order_id: UUID,
        status: OrderStatus,
        expected: OrderStatus,
        updated_at: datetime,
    ) -> None:
        """Write ``status`` only if the stored status is still ``expected``.

        Raises ConcurrentModificationError on a mismatch and
        OrderNotFoundError if the order does not exist.
        """
