"""Application service: Show Order use case (query)."""

from __future__ import annotations

from uuid import UUID

from laman.application.dto import OrderDTO
from laman.domain.exceptions import OrderNotFoundError
from laman.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: UUID) -> OrderDTO:
        view = self._order_repo.get_with_items(order_id)
        if view is None:
            raise OrderNotFoundError(order_id)
        return OrderDTO.from_domain(view)
