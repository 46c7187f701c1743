"""Application service: Update Order Status use case.

Reads the current status, lets the Order aggregate check the transition,
then writes the new status *conditionally* on the status that was read.
If another worker moved the order in between, the repository raises
ConcurrentModificationError and nothing is written; the caller may
re-read and retry.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from laman.domain.exceptions import (
    ConcurrentModificationError,
    UnknownOrderTransitionError,
    ValidationError,
)
from laman.domain.model.order import OrderStatus
from laman.domain.repository.order_repository import OrderRepository
from laman.domain.service.order_aggregate_builder import utc_now

logger = structlog.get_logger(__name__)


def parse_status(value: OrderStatus | str) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value.strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown order status: {value!r}") from None


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._clock = clock

    def handle(self, order_id: UUID, requested: OrderStatus | str) -> OrderStatus:
        """Apply the transition and return the previous status."""
        target = parse_status(requested)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise UnknownOrderTransitionError(order_id, target)

        previous = order.transition_to(target, self._clock())

        try:
            self._order_repo.update_status(
                order_id, order.status, expected=previous, updated_at=order.updated_at
            )
        except ConcurrentModificationError as exc:
            logger.warning(
                "Order status changed concurrently",
                order_id=str(order_id),
                expected=exc.expected.value,
                actual=exc.actual.value,
                requested=target.value,
            )
            raise

        logger.info(
            "Order status changed",
            order_id=str(order_id),
            from_status=previous.value,
            to_status=target.value,
        )
        return previous
