"""Tests for the JSON-file-backed order, delivery and payment repositories."""

import json
import multiprocessing
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from uuid import UUID, uuid4

import pytest

from laman.application.update_order_status import UpdateOrderStatusHandler
from laman.domain.exceptions import (
    ConcurrentModificationError,
    InvalidTransitionError,
    OrderNotFoundError,
    PersistenceError,
)
from laman.domain.model.customer import GuestCustomer, RegisteredCustomer
from laman.domain.model.order import OrderStatus
from laman.domain.model.order_request import OrderItemSpec, OrderRequest
from laman.domain.model.payment import PaymentMethod, PaymentStatus
from laman.domain.model.product import Product
from laman.domain.model.value_objects import Money
from laman.domain.service.order_aggregate_builder import OrderAggregateBuilder
from laman.domain.service.order_pricing_service import OrderPricingService
from laman.infrastructure.persistence.json_delivery_repository import JsonDeliveryRepository
from laman.infrastructure.persistence.json_order_repository import (
    COLLECTIONS,
    JsonOrderRepository,
)
from laman.infrastructure.persistence.json_payment_repository import JsonPaymentRepository
from laman.infrastructure.persistence.json_store import JsonDocumentStore

USER = UUID(int=3)
START = datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)
PRODUCT = Product(id=UUID(int=100), name="Manty", price=Money.of("120.00"), weight=Decimal("0.4"))


def _setup(tmp_path):
    path = tmp_path / "orders.json"
    store = JsonDocumentStore(path, COLLECTIONS, timeout=1.0)
    ticks = iter(START + timedelta(minutes=n) for n in range(100))
    builder = OrderAggregateBuilder(clock=lambda: next(ticks))
    pricer = OrderPricingService(Decimal("5"), Money.of("200"))
    return JsonOrderRepository(store), store, builder, pricer, path


def _aggregate(builder, pricer, **overrides):
    fields = dict(
        items=[OrderItemSpec(PRODUCT.id, 2)],
        payment_method=PaymentMethod.CASH,
        delivery_address="Lenina 1",
        user_id=USER,
        comment="call first",
    )
    fields.update(overrides)
    request = OrderRequest(**fields)
    return builder.build(request, pricer.price(request.items, {PRODUCT.id: PRODUCT}))


class TestJsonOrderRepository:

    def test_round_trip(self, tmp_path):
        repo, _, builder, pricer, _ = _setup(tmp_path)
        aggregate = _aggregate(builder, pricer)
        repo.add(aggregate)

        view = repo.get_with_items(aggregate.order.id)

        assert view.order.id == aggregate.order.id
        assert view.order.customer == RegisteredCustomer(user_id=USER)
        assert view.order.comment == "call first"
        assert view.order.final_total == Money.of("452.00")
        assert view.order.created_at == START
        assert [i.id for i in view.items] == [i.id for i in aggregate.items]
        assert view.items[0].unit_price == Money.of("120.00")

    def test_guest_round_trip(self, tmp_path):
        repo, _, builder, pricer, _ = _setup(tmp_path)
        aggregate = _aggregate(
            builder, pricer, user_id=None,
            guest_name="Anna", guest_phone="+7 900", guest_address="Mira 5",
        )
        repo.add(aggregate)
        order = repo.get_by_id(aggregate.order.id)
        assert order.customer == GuestCustomer("Anna", "+7 900", "Mira 5")

    def test_add_writes_delivery_and_payment(self, tmp_path):
        repo, store, builder, pricer, _ = _setup(tmp_path)
        aggregate = _aggregate(builder, pricer)
        repo.add(aggregate)

        delivery = JsonDeliveryRepository(store).get_by_order_id(aggregate.order.id)
        payment = JsonPaymentRepository(store).get_by_order_id(aggregate.order.id)
        assert delivery.address == "Lenina 1"
        assert delivery.weight == Decimal("0.8")
        assert payment.status == PaymentStatus.PENDING
        assert payment.amount == aggregate.order.final_total

    def test_duplicate_order_rejected(self, tmp_path):
        repo, _, builder, pricer, _ = _setup(tmp_path)
        aggregate = _aggregate(builder, pricer)
        repo.add(aggregate)
        with pytest.raises(PersistenceError, match="already exists"):
            repo.add(aggregate)

    def test_failed_write_leaves_file_untouched(self, tmp_path, monkeypatch):
        repo, _, builder, pricer, path = _setup(tmp_path)
        before = path.read_text(encoding="utf-8")

        def boom(aggregate):
            raise PersistenceError("disk full")

        monkeypatch.setattr(JsonOrderRepository, "_payment_to_raw", staticmethod(boom))
        with pytest.raises(PersistenceError):
            repo.add(_aggregate(builder, pricer))

        assert path.read_text(encoding="utf-8") == before
        data = json.loads(before)
        assert all(data[name] == [] for name in COLLECTIONS)

    def test_list_by_user_newest_first(self, tmp_path):
        repo, _, builder, pricer, _ = _setup(tmp_path)
        first = _aggregate(builder, pricer)
        second = _aggregate(builder, pricer)
        other = _aggregate(builder, pricer, user_id=uuid4())
        for aggregate in (first, second, other):
            repo.add(aggregate)

        orders = repo.list_by_user(USER)
        assert [o.id for o in orders] == [second.order.id, first.order.id]

    def test_unknown_order(self, tmp_path):
        repo, _, _, _, _ = _setup(tmp_path)
        assert repo.get_by_id(uuid4()) is None
        assert repo.get_with_items(uuid4()) is None


class TestConditionalStatusUpdate:

    def test_update_when_expected_matches(self, tmp_path):
        repo, _, builder, pricer, _ = _setup(tmp_path)
        aggregate = _aggregate(builder, pricer)
        repo.add(aggregate)
        later = START + timedelta(hours=1)

        repo.update_status(
            aggregate.order.id, OrderStatus.CANCELLED,
            expected=OrderStatus.NEW, updated_at=later,
        )

        order = repo.get_by_id(aggregate.order.id)
        assert order.status == OrderStatus.CANCELLED
        assert order.updated_at == later

    def test_stale_expected_status_rejected(self, tmp_path):
        repo, _, builder, pricer, _ = _setup(tmp_path)
        aggregate = _aggregate(builder, pricer)
        repo.add(aggregate)

        with pytest.raises(ConcurrentModificationError):
            repo.update_status(
                aggregate.order.id, OrderStatus.IN_PROGRESS,
                expected=OrderStatus.CONFIRMED, updated_at=START,
            )
        assert repo.get_by_id(aggregate.order.id).status == OrderStatus.NEW

    def test_unknown_order(self, tmp_path):
        repo, _, _, _, _ = _setup(tmp_path)
        with pytest.raises(OrderNotFoundError):
            repo.update_status(
                uuid4(), OrderStatus.CANCELLED,
                expected=OrderStatus.NEW, updated_at=START,
            )


class TestDeliveryAndPaymentUpdates:

    def test_delivery_save(self, tmp_path):
        repo, store, builder, pricer, _ = _setup(tmp_path)
        aggregate = _aggregate(builder, pricer)
        repo.add(aggregate)
        deliveries = JsonDeliveryRepository(store)

        delivery = deliveries.get_by_order_id(aggregate.order.id)
        delivery.update(START + timedelta(hours=1), distance=Decimal("2.5"))
        deliveries.save(delivery)

        assert deliveries.get_by_order_id(aggregate.order.id).distance == Decimal("2.5")

    def test_payment_save(self, tmp_path):
        repo, store, builder, pricer, _ = _setup(tmp_path)
        aggregate = _aggregate(builder, pricer)
        repo.add(aggregate)
        payments = JsonPaymentRepository(store)

        payment = payments.get_by_order_id(aggregate.order.id)
        payment.mark(PaymentStatus.PAID, START + timedelta(hours=1))
        payments.save(payment)

        assert payments.get_by_order_id(aggregate.order.id).status == PaymentStatus.PAID


# ── Several processes sharing one data directory ─────────────────────────────
#
# Workers are module-level so the "spawn" start method can import them.  Each
# one opens its own store on the same file, the way separate CLI runs do.


def _add_orders_worker(path: str, count: int, barrier) -> None:
    repo = JsonOrderRepository(JsonDocumentStore(Path(path), COLLECTIONS, timeout=60.0))
    builder = OrderAggregateBuilder()
    pricer = OrderPricingService(Decimal("5"), Money.of("200"))
    barrier.wait(timeout=60)
    for _ in range(count):
        repo.add(_aggregate(builder, pricer))


def _move_orders_worker(path: str, order_ids: list[str], target: str, out: str, barrier) -> None:
    store = JsonDocumentStore(Path(path), COLLECTIONS, timeout=60.0)
    handler = UpdateOrderStatusHandler(JsonOrderRepository(store))
    won = []
    barrier.wait(timeout=60)
    for order_id in order_ids:
        try:
            handler.handle(UUID(order_id), target)
        except (ConcurrentModificationError, InvalidTransitionError):
            continue
        won.append(order_id)
    Path(out).write_text(json.dumps(won), encoding="utf-8")


def _run_all(processes) -> None:
    for process in processes:
        process.start()
    for process in processes:
        process.join(timeout=120)
    assert all(process.exitcode == 0 for process in processes)


class TestCrossProcessConsistency:

    def test_concurrent_adds_lose_nothing(self, tmp_path):
        path = tmp_path / "orders.json"
        JsonDocumentStore(path, COLLECTIONS)
        ctx = multiprocessing.get_context("spawn")
        workers, per_worker = 4, 15
        barrier = ctx.Barrier(workers)

        _run_all([
            ctx.Process(target=_add_orders_worker, args=(str(path), per_worker, barrier))
            for _ in range(workers)
        ])

        data = json.loads(path.read_text(encoding="utf-8"))
        total = workers * per_worker
        assert len(data["orders"]) == total
        assert len({raw["id"] for raw in data["orders"]}) == total
        assert len(data["order_items"]) == total
        assert len(data["deliveries"]) == total
        assert len(data["payments"]) == total

    def test_racing_status_updates_have_one_winner(self, tmp_path):
        repo, _, builder, pricer, path = _setup(tmp_path)
        order_ids = []
        for _ in range(20):
            aggregate = _aggregate(builder, pricer)
            repo.add(aggregate)
            for expected, target in (
                (OrderStatus.NEW, OrderStatus.NEEDS_CONFIRMATION),
                (OrderStatus.NEEDS_CONFIRMATION, OrderStatus.CONFIRMED),
                (OrderStatus.CONFIRMED, OrderStatus.IN_PROGRESS),
            ):
                repo.update_status(aggregate.order.id, target, expected=expected, updated_at=START)
            order_ids.append(str(aggregate.order.id))

        ctx = multiprocessing.get_context("spawn")
        barrier = ctx.Barrier(2)
        outputs = {
            "DELIVERED": tmp_path / "delivered.json",
            "CANCELLED": tmp_path / "cancelled.json",
        }
        _run_all([
            ctx.Process(
                target=_move_orders_worker,
                args=(str(path), order_ids, target, str(out), barrier),
            )
            for target, out in outputs.items()
        ])

        delivered = set(json.loads(outputs["DELIVERED"].read_text(encoding="utf-8")))
        cancelled = set(json.loads(outputs["CANCELLED"].read_text(encoding="utf-8")))
        assert delivered.isdisjoint(cancelled)
        assert delivered | cancelled == set(order_ids)
        for order_id in order_ids:
            stored = repo.get_by_id(UUID(order_id)).status
            expected = OrderStatus.DELIVERED if order_id in delivered else OrderStatus.CANCELLED
            assert stored == expected
