"""Abstract repository for Delivery records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from laman.domain.model.delivery import Delivery


class DeliveryRepository(ABC):

    @abstractmethod
    def get_by_order_id(self, order_id: UUID) -> Delivery | None:
        """Return the delivery of an order, or None."""

    @abstractmethod
    def save(self, delivery: Delivery) -> None:
        """Persist changes to an existing delivery."""
