"""JSON-document-backed implementation of PaymentRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from laman.domain.exceptions import EntityNotFoundError
from laman.domain.model.payment import Payment, PaymentMethod, PaymentStatus
from laman.domain.model.value_objects import Money
from laman.domain.repository.payment_repository import PaymentRepository
from laman.infrastructure.persistence.json_store import JsonDocumentStore

COLLECTION = "payments"


class JsonPaymentRepository(PaymentRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    # --- PaymentRepository interface ------------------------------------------

    def get_by_order_id(self, order_id: UUID) -> Payment | None:
        for raw in self._store.read()[COLLECTION]:
            if raw["order_id"] == str(order_id):
                return self.to_domain(raw)
        return None

    def save(self, payment: Payment) -> None:
        with self._store.transaction() as document:
            rows = document[COLLECTION]
            for i, raw in enumerate(rows):
                if raw["id"] == str(payment.id):
                    rows[i] = self.to_raw(payment)
                    return
            raise EntityNotFoundError(f"Payment {payment.id} not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def to_raw(payment: Payment) -> dict:
        return {
            "id": str(payment.id),
            "order_id": str(payment.order_id),
            "method": payment.method.value,
            "status": payment.status.value,
            "amount": str(payment.amount.amount),
            "currency": payment.amount.currency,
            "created_at": payment.created_at.isoformat(),
            "updated_at": payment.updated_at.isoformat(),
        }

    @staticmethod
    def to_domain(raw: dict) -> Payment:
        return Payment(
            id=UUID(raw["id"]),
            order_id=UUID(raw["order_id"]),
            method=PaymentMethod(raw["method"]),
            status=PaymentStatus(raw["status"]),
            amount=Money(Decimal(raw["amount"]), raw.get("currency", "RUB")),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
