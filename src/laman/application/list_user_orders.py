"""Application service: List a user's orders (query).

Newest first.  A user without orders gets an empty list, not an error.
"""

from __future__ import annotations

from uuid import UUID

from laman.application.dto import OrderSummaryDTO
from laman.domain.repository.order_repository import OrderRepository


class ListUserOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: UUID) -> list[OrderSummaryDTO]:
        return [
            OrderSummaryDTO.from_domain(order)
            for order in self._order_repo.list_by_user(user_id)
        ]
