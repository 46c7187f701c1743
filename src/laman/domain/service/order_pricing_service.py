"""Domain service: Order Pricer.

Pure computation over an item list and a catalog snapshot.  Fee settings
are fixed when the pricer is constructed and never read from globals.

    items_total = sum(unit_price * quantity)
    service_fee = items_total * service_fee_percent / 100   (rounded to 0.01)
    final_total = items_total + service_fee + delivery_fee
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from laman.domain.exceptions import (
    ProductNotFoundError,
    ProductUnavailableError,
    ValidationError,
)
from laman.domain.model.order_request import OrderItemSpec
from laman.domain.model.product import Product
from laman.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class PricedLine:
    product_id: UUID
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class PricingResult:
    lines: list[PricedLine]
    items_total: Money
    service_fee: Money
    delivery_fee: Money
    final_total: Money
    total_weight: Decimal


class OrderPricingService:

    def __init__(self, service_fee_percent: Decimal, delivery_fee: Money) -> None:
        if service_fee_percent < 0:
            raise ValidationError("Service fee percent cannot be negative")
        self._service_fee_percent = service_fee_percent
        self._delivery_fee = delivery_fee

    def price(
        self,
        items: Sequence[OrderItemSpec],
        catalog: Mapping[UUID, Product],
    ) -> PricingResult:
        """Price every requested item against the catalog snapshot.

        Any missing or unavailable product fails the whole order; there
        are no partial orders.
        """
        if not items:
            raise ValidationError("Order must contain at least one item")

        lines: list[PricedLine] = []
        items_total = Money.zero()
        total_weight = Decimal("0")

        for spec in items:
            quantity = Quantity(spec.quantity)
            product = catalog.get(spec.product_id)
            if product is None:
                raise ProductNotFoundError(spec.product_id)
            if not product.is_available:
                raise ProductUnavailableError(product.id, product.name)

            line = PricedLine(
                product_id=product.id,
                quantity=quantity,
                unit_price=product.price,  # <-- price snapshot
            )
            lines.append(line)
            items_total = items_total + line.line_total

            if product.weight is not None:
                total_weight += product.weight * quantity.value

        service_fee = items_total.percent(self._service_fee_percent)
        final_total = items_total + service_fee + self._delivery_fee

        return PricingResult(
            lines=lines,
            items_total=items_total,
            service_fee=service_fee,
            delivery_fee=self._delivery_fee,
            final_total=final_total,
            total_weight=total_weight,
        )
