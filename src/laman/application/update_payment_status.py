"""Application service: Update Payment Status use case.

Entry point for the payment confirmation flow.  The amount is fixed at
order creation and never changes here.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from laman.application.dto import PaymentDTO
from laman.domain.exceptions import EntityNotFoundError, ValidationError
from laman.domain.model.payment import PaymentStatus
from laman.domain.repository.payment_repository import PaymentRepository
from laman.domain.service.order_aggregate_builder import utc_now

logger = structlog.get_logger(__name__)


class UpdatePaymentStatusHandler:

    def __init__(
        self,
        payment_repo: PaymentRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._payment_repo = payment_repo
        self._clock = clock

    def handle(self, order_id: UUID, status: PaymentStatus | str) -> PaymentDTO:
        if not isinstance(status, PaymentStatus):
            try:
                status = PaymentStatus(status.strip().lower())
            except ValueError:
                raise ValidationError(f"Unknown payment status: {status!r}") from None

        payment = self._payment_repo.get_by_order_id(order_id)
        if payment is None:
            raise EntityNotFoundError(f"No payment for order {order_id}")

        previous = payment.status
        payment.mark(status, self._clock())
        self._payment_repo.save(payment)

        logger.info(
            "Payment status changed",
            order_id=str(order_id),
            from_status=previous.value,
            to_status=status.value,
        )
        return PaymentDTO.from_domain(payment)
