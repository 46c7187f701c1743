"""Payment record, one per order.

The order engine only creates payments.  Their status is moved later by
the payment confirmation flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from laman.domain.model.value_objects import Money


class PaymentMethod(Enum):
    CASH = "CASH"
    TRANSFER = "TRANSFER"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


@dataclass
class Payment:

    id: UUID
    order_id: UUID
    method: PaymentMethod
    amount: Money
    created_at: datetime
    updated_at: datetime
    status: PaymentStatus = PaymentStatus.PENDING

    def mark(self, status: PaymentStatus, at: datetime) -> None:
        self.status = status
        self.updated_at = at
