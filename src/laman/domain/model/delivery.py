"""Delivery record, one per order.

Created together with the order.  Couriers and dispatch may later
correct the address or fill in distance and weight.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from laman.domain.exceptions import ValidationError


@dataclass
class Delivery:

    id: UUID
    order_id: UUID
    address: str
    created_at: datetime
    updated_at: datetime
    distance: Decimal | None = None  # kilometres
    weight: Decimal | None = None  # kilograms, sum over the order's items

    def update(
        self,
        at: datetime,
        address: str | None = None,
        distance: Decimal | None = None,
        weight: Decimal | None = None,
    ) -> None:
        """Apply the given changes; ``None`` leaves a field untouched."""
        if address is None and distance is None and weight is None:
            raise ValidationError("Nothing to update")
        if address is not None:
            if not address.strip():
                raise ValidationError("Delivery address cannot be empty")
            self.address = address.strip()
        if distance is not None:
            self.distance = distance
        if weight is not None:
            self.weight = weight
        self.updated_at = at
