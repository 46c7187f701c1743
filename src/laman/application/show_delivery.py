"""Application service: Show Delivery of an order (query)."""

from __future__ import annotations

from uuid import UUID

from laman.application.dto import DeliveryDTO
from laman.domain.exceptions import EntityNotFoundError
from laman.domain.repository.delivery_repository import DeliveryRepository


class ShowDeliveryHandler:

    def __init__(self, delivery_repo: DeliveryRepository) -> None:
        self._delivery_repo = delivery_repo

    def handle(self, order_id: UUID) -> DeliveryDTO:
        delivery = self._delivery_repo.get_by_order_id(order_id)
        if delivery is None:
            raise EntityNotFoundError(f"No delivery for order {order_id}")
        return DeliveryDTO.from_domain(delivery)
