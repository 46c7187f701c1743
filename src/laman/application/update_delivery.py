"""Application service: Update Delivery use case.

Dispatch corrects the address or records distance and weight after the
order was placed.  Order totals are never recomputed from these values.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from uuid import UUID

import structlog

from laman.application.dto import DeliveryDTO
from laman.domain.exceptions import EntityNotFoundError
from laman.domain.repository.delivery_repository import DeliveryRepository
from laman.domain.service.order_aggregate_builder import utc_now

logger = structlog.get_logger(__name__)


class UpdateDeliveryHandler:

    def __init__(
        self,
        delivery_repo: DeliveryRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._delivery_repo = delivery_repo
        self._clock = clock

    def handle(
        self,
        order_id: UUID,
        address: str | None = None,
        distance: Decimal | None = None,
        weight: Decimal | None = None,
    ) -> DeliveryDTO:
        delivery = self._delivery_repo.get_by_order_id(order_id)
        if delivery is None:
            raise EntityNotFoundError(f"No delivery for order {order_id}")

        delivery.update(self._clock(), address=address, distance=distance, weight=weight)
        self._delivery_repo.save(delivery)

        logger.info("Delivery updated", order_id=str(order_id))
        return DeliveryDTO.from_domain(delivery)
