"""JSON-document-backed implementation of OrderRepository.

Orders, their items, deliveries and payments share one
``JsonDocumentStore`` so ``add`` commits all four in one file replace
and ``update_status`` checks and writes under the same lock.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from laman.domain.exceptions import (
    ConcurrentModificationError,
    OrderNotFoundError,
    PersistenceError,
)
from laman.domain.model.customer import Customer, GuestCustomer, RegisteredCustomer
from laman.domain.model.order import (
    Order,
    OrderAggregate,
    OrderItem,
    OrderStatus,
    OrderWithItems,
)
from laman.domain.model.value_objects import Money, Quantity
from laman.domain.repository.order_repository import OrderRepository
from laman.infrastructure.persistence import json_delivery_repository, json_payment_repository
from laman.infrastructure.persistence.json_delivery_repository import JsonDeliveryRepository
from laman.infrastructure.persistence.json_payment_repository import JsonPaymentRepository
from laman.infrastructure.persistence.json_store import Document, JsonDocumentStore

ORDERS = "orders"
ORDER_ITEMS = "order_items"
COLLECTIONS = (
    ORDERS,
    ORDER_ITEMS,
    json_delivery_repository.COLLECTION,
    json_payment_repository.COLLECTION,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    # --- OrderRepository interface --------------------------------------------

    def add(self, aggregate: OrderAggregate) -> None:
        order_id = str(aggregate.order.id)
        with self._store.transaction() as document:
            if self._find(document, order_id) is not None:
                raise PersistenceError(f"Order {order_id} already exists")

            document[ORDERS].append(self._order_to_raw(aggregate.order))
            document[ORDER_ITEMS].extend(
                self._item_to_raw(item) for item in aggregate.items
            )
            document[json_delivery_repository.COLLECTION].append(
                self._delivery_to_raw(aggregate)
            )
            document[json_payment_repository.COLLECTION].append(
                self._payment_to_raw(aggregate)
            )

    def get_by_id(self, order_id: UUID) -> Order | None:
        raw = self._find(self._store.read(), str(order_id))
        return None if raw is None else self._order_to_domain(raw)

    def get_with_items(self, order_id: UUID) -> OrderWithItems | None:
        document = self._store.read()
        raw = self._find(document, str(order_id))
        if raw is None:
            return None
        items = [
            self._item_to_domain(item)
            for item in document[ORDER_ITEMS]
            if item["order_id"] == raw["id"]
        ]
        return OrderWithItems(order=self._order_to_domain(raw), items=items)

    def list_by_user(self, user_id: UUID) -> list[Order]:
        orders = [
            self._order_to_domain(raw)
            for raw in self._store.read()[ORDERS]
            if raw.get("user_id") == str(user_id)
        ]
        orders.sort(key=lambda order: order.created_at, reverse=True)
        return orders

    def update_status(
        self,
        order_id: UUID,
        status: OrderStatus,
        expected: OrderStatus,
        updated_at: datetime,
    ) -> None:
        with self._store.transaction() as document:
            raw = self._find(document, str(order_id))
            if raw is None:
                raise OrderNotFoundError(order_id)
            current = OrderStatus(raw["status"])
            if current != expected:
                raise ConcurrentModificationError(order_id, expected, current)
            raw["status"] = status.value
            raw["updated_at"] = updated_at.isoformat()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _order_to_raw(order: Order) -> dict:
        return {
            "id": str(order.id),
            **_customer_to_raw(order.customer),
            "comment": order.comment,
            "status": order.status.value,
            "items_total": str(order.items_total.amount),
            "service_fee": str(order.service_fee.amount),
            "delivery_fee": str(order.delivery_fee.amount),
            "final_total": str(order.final_total.amount),
            "currency": order.final_total.currency,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
        }

    @staticmethod
    def _order_to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "RUB")
        return Order(
            id=UUID(raw["id"]),
            customer=_customer_to_domain(raw),
            comment=raw.get("comment"),
            status=OrderStatus(raw["status"]),
            items_total=Money(Decimal(raw["items_total"]), currency),
            service_fee=Money(Decimal(raw["service_fee"]), currency),
            delivery_fee=Money(Decimal(raw["delivery_fee"]), currency),
            final_total=Money(Decimal(raw["final_total"]), currency),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    @staticmethod
    def _item_to_raw(item: OrderItem) -> dict:
        return {
            "id": str(item.id),
            "order_id": str(item.order_id),
            "product_id": str(item.product_id),
            "quantity": item.quantity.value,
            "price": str(item.unit_price.amount),
            "currency": item.unit_price.currency,
            "created_at": item.created_at.isoformat(),
        }

    @staticmethod
    def _item_to_domain(raw: dict) -> OrderItem:
        return OrderItem(
            id=UUID(raw["id"]),
            order_id=UUID(raw["order_id"]),
            product_id=UUID(raw["product_id"]),
            quantity=Quantity(raw["quantity"]),
            unit_price=Money(Decimal(raw["price"]), raw.get("currency", "RUB")),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    @staticmethod
    def _delivery_to_raw(aggregate: OrderAggregate) -> dict:
        return JsonDeliveryRepository.to_raw(aggregate.delivery)

    @staticmethod
    def _payment_to_raw(aggregate: OrderAggregate) -> dict:
        return JsonPaymentRepository.to_raw(aggregate.payment)

    # --- Lookup helpers -------------------------------------------------------

    @staticmethod
    def _find(document: Document, order_id: str) -> dict | None:
        for raw in document[ORDERS]:
            if raw["id"] == order_id:
                return raw
        return None


def _customer_to_raw(customer: Customer) -> dict:
    if isinstance(customer, RegisteredCustomer):
        return {
            "user_id": str(customer.user_id),
            "guest_name": customer.name,
            "guest_phone": customer.phone,
            "guest_address": None,
        }
    return {
        "user_id": None,
        "guest_name": customer.name,
        "guest_phone": customer.phone,
        "guest_address": customer.address,
    }


def _customer_to_domain(raw: dict) -> Customer:
    if raw.get("user_id"):
        return RegisteredCustomer(
            user_id=UUID(raw["user_id"]),
            name=raw.get("guest_name"),
            phone=raw.get("guest_phone"),
        )
    return GuestCustomer(
        name=raw["guest_name"],
        phone=raw["guest_phone"],
        address=raw["guest_address"],
    )
