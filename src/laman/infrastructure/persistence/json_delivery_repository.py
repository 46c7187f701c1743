"""JSON-document-backed implementation of DeliveryRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from laman.domain.exceptions import EntityNotFoundError
from laman.domain.model.delivery import Delivery
from laman.domain.repository.delivery_repository import DeliveryRepository
from laman.infrastructure.persistence.json_store import JsonDocumentStore

COLLECTION = "deliveries"


class JsonDeliveryRepository(DeliveryRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    # --- DeliveryRepository interface -----------------------------------------

    def get_by_order_id(self, order_id: UUID) -> Delivery | None:
        for raw in self._store.read()[COLLECTION]:
            if raw["order_id"] == str(order_id):
                return self.to_domain(raw)
        return None

    def save(self, delivery: Delivery) -> None:
        with self._store.transaction() as document:
            rows = document[COLLECTION]
            for i, raw in enumerate(rows):
                if raw["id"] == str(delivery.id):
                    rows[i] = self.to_raw(delivery)
                    return
            raise EntityNotFoundError(f"Delivery {delivery.id} not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def to_raw(delivery: Delivery) -> dict:
        return {
            "id": str(delivery.id),
            "order_id": str(delivery.order_id),
            "address": delivery.address,
            "distance": None if delivery.distance is None else str(delivery.distance),
            "weight": None if delivery.weight is None else str(delivery.weight),
            "created_at": delivery.created_at.isoformat(),
            "updated_at": delivery.updated_at.isoformat(),
        }

    @staticmethod
    def to_domain(raw: dict) -> Delivery:
        return Delivery(
            id=UUID(raw["id"]),
            order_id=UUID(raw["order_id"]),
            address=raw["address"],
            distance=None if raw.get("distance") is None else Decimal(raw["distance"]),
            weight=None if raw.get("weight") is None else Decimal(raw["weight"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
