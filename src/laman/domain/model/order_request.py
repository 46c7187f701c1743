"""Incoming order request, before pricing and validation.

Plain immutable containers; validation happens in the pricer and the
aggregate builder so a request object can hold anything a client sent.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from laman.domain.model.payment import PaymentMethod


@dataclass(frozen=True)
class OrderItemSpec:
    """What the customer asked for: product ID + quantity."""

    product_id: UUID
    quantity: int


@dataclass(frozen=True)
class OrderRequest:

    items: list[OrderItemSpec]
    payment_method: PaymentMethod
    delivery_address: str
    user_id: UUID | None = None
    guest_name: str | None = None
    guest_phone: str | None = None
    guest_address: str | None = None
    comment: str | None = None

    @property
    def product_ids(self) -> set[UUID]:
        return {spec.product_id for spec in self.items}
