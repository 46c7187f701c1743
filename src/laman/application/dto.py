"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money is pre-formatted
for display; ``OrderDTO.amounts`` also keeps the totals as plain decimal
strings for machine output.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from laman.domain.model.delivery import Delivery
from laman.domain.model.order import Order, OrderItem, OrderWithItems
from laman.domain.model.payment import Payment

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order item as displayed to the user."""

    id: str
    product_id: str
    quantity: int
    unit_price: str  # formatted, e.g. "100.00 ₽"
    line_total: str

    @staticmethod
    def from_domain(item: OrderItem) -> OrderItemDTO:
        return OrderItemDTO(
            id=str(item.id),
            product_id=str(item.product_id),
            quantity=item.quantity.value,
            unit_price=str(item.unit_price),
            line_total=str(item.line_total),
        )


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: an order without its items (list views)."""

    id: str
    status: str
    customer: str
    final_total: str
    created_at: str

    @staticmethod
    def from_domain(order: Order) -> OrderSummaryDTO:
        return OrderSummaryDTO(
            id=str(order.id),
            status=order.status.value,
            customer=_describe_customer(order),
            final_total=str(order.final_total),
            created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    status: str
    customer: str
    user_id: str | None
    comment: str | None
    items: list[OrderItemDTO]
    items_total: str
    service_fee: str
    delivery_fee: str
    final_total: str
    created_at: str
    updated_at: str
    amounts: dict[str, str] = field(default_factory=dict)  # e.g. {"final_total": "462.50"}

    @staticmethod
    def from_domain(view: OrderWithItems) -> OrderDTO:
        order = view.order
        return OrderDTO(
            id=str(order.id),
            status=order.status.value,
            customer=_describe_customer(order),
            user_id=str(order.user_id) if order.user_id else None,
            comment=order.comment,
            items=[OrderItemDTO.from_domain(item) for item in view.items],
            items_total=str(order.items_total),
            service_fee=str(order.service_fee),
            delivery_fee=str(order.delivery_fee),
            final_total=str(order.final_total),
            created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
            updated_at=order.updated_at.strftime(_TIMESTAMP_FORMAT),
            amounts={
                "items_total": str(order.items_total.amount),
                "service_fee": str(order.service_fee.amount),
                "delivery_fee": str(order.delivery_fee.amount),
                "final_total": str(order.final_total.amount),
                "currency": order.final_total.currency,
            },
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DeliveryDTO:

    order_id: str
    address: str
    distance: str | None
    weight: str | None
    updated_at: str

    @staticmethod
    def from_domain(delivery: Delivery) -> DeliveryDTO:
        return DeliveryDTO(
            order_id=str(delivery.order_id),
            address=delivery.address,
            distance=None if delivery.distance is None else str(delivery.distance),
            weight=None if delivery.weight is None else str(delivery.weight),
            updated_at=delivery.updated_at.strftime(_TIMESTAMP_FORMAT),
        )


@dataclass(frozen=True)
class PaymentDTO:

    order_id: str
    method: str
    status: str
    amount: str

    @staticmethod
    def from_domain(payment: Payment) -> PaymentDTO:
        return PaymentDTO(
            order_id=str(payment.order_id),
            method=payment.method.value,
            status=payment.status.value,
            amount=str(payment.amount),
        )


def _describe_customer(order: Order) -> str:
    if order.is_guest:
        return f"guest {order.customer.display_name}"
    return f"user {order.user_id}"
