"""Application service: Show Payment of an order (query)."""

from __future__ import annotations

from uuid import UUID

from laman.application.dto import PaymentDTO
from laman.domain.exceptions import EntityNotFoundError
from laman.domain.repository.payment_repository import PaymentRepository


class ShowPaymentHandler:

    def __init__(self, payment_repo: PaymentRepository) -> None:
        self._payment_repo = payment_repo

    def handle(self, order_id: UUID) -> PaymentDTO:
        payment = self._payment_repo.get_by_order_id(order_id)
        if payment is None:
            raise EntityNotFoundError(f"No payment for order {order_id}")
        return PaymentDTO.from_domain(payment)
