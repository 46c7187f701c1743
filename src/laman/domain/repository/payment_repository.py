"""Abstract repository for Payment records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from laman.domain.model.payment import Payment


class PaymentRepository(ABC):

    @abstractmethod
    def get_by_order_id(self, order_id: UUID) -> Payment | None:
        """Return the payment of an order, or None."""

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """Persist changes to an existing payment."""
