"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its items, its delivery record
and its payment record.  All business invariants are enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from laman.domain.exceptions import InvalidTransitionError, ValidationError
from laman.domain.model.customer import Customer, GuestCustomer, RegisteredCustomer
from laman.domain.model.delivery import Delivery
from laman.domain.model.payment import Payment
from laman.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    NEW = "NEW"
    NEEDS_CONFIRMATION = "NEEDS_CONFIRMATION"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self]


# ---------------------------------------------------------------------------
# Lifecycle: every status must appear as a key, terminal ones map to nothing.
# ---------------------------------------------------------------------------
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.NEW: frozenset(
        {OrderStatus.NEEDS_CONFIRMATION, OrderStatus.CANCELLED}
    ),
    OrderStatus.NEEDS_CONFIRMATION: frozenset(
        {OrderStatus.CONFIRMED, OrderStatus.CANCELLED}
    ),
    OrderStatus.CONFIRMED: frozenset(
        {OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED}
    ),
    OrderStatus.IN_PROGRESS: frozenset(
        {OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    ),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderItem:
    """Captures the price snapshot of a product at order-creation time.

    Never mutated after creation; later catalog price changes do not
    reach it.
    """

    id: UUID
    order_id: UUID
    product_id: UUID
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    created_at: datetime

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    New orders are assembled by ``OrderAggregateBuilder``; the repository
    reconstitutes persisted ones through the same constructor, so the
    money invariant is checked on both paths.
    """

    id: UUID
    customer: Customer
    items_total: Money
    service_fee: Money
    delivery_fee: Money
    final_total: Money
    created_at: datetime
    updated_at: datetime
    status: OrderStatus = OrderStatus.NEW
    comment: str | None = None

    def __post_init__(self) -> None:
        expected = self.items_total + self.service_fee + self.delivery_fee
        if self.final_total != expected:
            raise ValidationError(
                f"Final total {self.final_total} does not match "
                f"items + service fee + delivery fee ({expected})"
            )

    # --- Identity -------------------------------------------------------------

    @property
    def user_id(self) -> UUID | None:
        if isinstance(self.customer, RegisteredCustomer):
            return self.customer.user_id
        return None

    @property
    def is_guest(self) -> bool:
        return isinstance(self.customer, GuestCustomer)

    # --- State transitions ----------------------------------------------------

    def transition_to(self, target: OrderStatus, at: datetime) -> OrderStatus:
        """Move to ``target`` if the lifecycle allows it.

        Returns the previous status so the caller can make the persisted
        write conditional on it.
        """
        if not self.status.can_transition_to(target):
            raise InvalidTransitionError(self.status, target)
        previous = self.status
        self.status = target
        self.updated_at = at
        return previous


@dataclass
class OrderWithItems:
    """Read model: an order joined with its items in creation order."""

    order: Order
    items: list[OrderItem] = field(default_factory=list)


@dataclass
class OrderAggregate:
    """Everything created for a new order, persisted as one unit."""

    order: Order
    items: list[OrderItem]
    delivery: Delivery
    payment: Payment

    def __post_init__(self) -> None:
        if not self.items:
            raise ValidationError("Order must contain at least one item")
        owner = self.order.id
        if any(item.order_id != owner for item in self.items):
            raise ValidationError("Every order item must belong to the order")
        if self.delivery.order_id != owner or self.payment.order_id != owner:
            raise ValidationError("Delivery and payment must belong to the order")
        if self.payment.amount != self.order.final_total:
            raise ValidationError(
                f"Payment amount {self.payment.amount} does not match "
                f"order total {self.order.final_total}"
            )

    def with_items(self) -> OrderWithItems:
        return OrderWithItems(order=self.order, items=list(self.items))
