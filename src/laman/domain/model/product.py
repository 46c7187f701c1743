"""Product aggregate.

Products live independently of orders and belong to the store catalog.
Prices change and products go in and out of stock; orders never see
those changes because they capture a price snapshot at creation time.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from laman.domain.exceptions import ValidationError
from laman.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog, as seen by order pricing."""

    id: UUID
    name: str
    price: Money
    is_available: bool = True
    weight: Decimal | None = None  # kilograms per unit

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because order items
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def set_availability(self, available: bool) -> None:
        self.is_available = available
