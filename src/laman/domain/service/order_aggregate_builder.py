"""Domain service: Order Aggregate Builder.

Turns a validated request plus its pricing into the four records of a new
order.  Pure construction: identifiers and the clock are injected, and
nothing is read or written here.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from uuid import UUID, uuid4

from laman.domain.exceptions import ValidationError
from laman.domain.model.customer import Customer, resolve_customer
from laman.domain.model.delivery import Delivery
from laman.domain.model.order import Order, OrderAggregate, OrderItem, OrderStatus
from laman.domain.model.order_request import OrderRequest
from laman.domain.model.payment import Payment, PaymentMethod, PaymentStatus
from laman.domain.service.order_pricing_service import PricingResult


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderAggregateBuilder:

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._clock = clock
        self._new_id = id_factory

    def check(self, request: OrderRequest) -> Customer:
        """Validate the parts of a request that need no catalog data.

        Returns the customer identity so callers can fail fast before
        touching the catalog.
        """
        customer = resolve_customer(
            user_id=request.user_id,
            guest_name=request.guest_name,
            guest_phone=request.guest_phone,
            guest_address=request.guest_address,
        )
        if not request.delivery_address or not request.delivery_address.strip():
            raise ValidationError("Delivery address is required")
        if not isinstance(request.payment_method, PaymentMethod):
            raise ValidationError(f"Unknown payment method: {request.payment_method!r}")
        if not request.items:
            raise ValidationError("Order must contain at least one item")
        return customer

    def build(self, request: OrderRequest, pricing: PricingResult) -> OrderAggregate:
        customer = self.check(request)
        now = self._clock()
        order_id = self._new_id()

        comment = request.comment.strip() if request.comment else None

        order = Order(
            id=order_id,
            customer=customer,
            comment=comment or None,
            status=OrderStatus.NEW,
            items_total=pricing.items_total,
            service_fee=pricing.service_fee,
            delivery_fee=pricing.delivery_fee,
            final_total=pricing.final_total,
            created_at=now,
            updated_at=now,
        )

        items = [
            OrderItem(
                id=self._new_id(),
                order_id=order_id,
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=line.unit_price,
                created_at=now,
            )
            for line in pricing.lines
        ]

        delivery = Delivery(
            id=self._new_id(),
            order_id=order_id,
            address=request.delivery_address.strip(),
            weight=pricing.total_weight,
            created_at=now,
            updated_at=now,
        )

        payment = Payment(
            id=self._new_id(),
            order_id=order_id,
            method=request.payment_method,
            status=PaymentStatus.PENDING,
            amount=pricing.final_total,
            created_at=now,
            updated_at=now,
        )

        return OrderAggregate(order=order, items=items, delivery=delivery, payment=payment)
