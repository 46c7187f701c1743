"""Tests for the shared JSON document store and the product catalog file."""

import threading
from decimal import Decimal
from uuid import uuid4

import pytest
from filelock import FileLock

from laman.domain.exceptions import UnavailableError
from laman.domain.model.product import Product
from laman.domain.model.value_objects import Money
from laman.infrastructure.persistence.json_product_repository import JsonProductRepository
from laman.infrastructure.persistence.json_store import JsonDocumentStore, lock_path_for


class TestJsonDocumentStore:

    def test_creates_empty_collections(self, tmp_path):
        store = JsonDocumentStore(tmp_path / "nested" / "doc.json", ("a", "b"))
        assert store.read() == {"a": [], "b": []}

    def test_commits_on_success(self, tmp_path):
        store = JsonDocumentStore(tmp_path / "doc.json", ("a",))
        with store.transaction() as document:
            document["a"].append({"id": "1"})
        assert store.read() == {"a": [{"id": "1"}]}

    def test_discards_on_error(self, tmp_path):
        store = JsonDocumentStore(tmp_path / "doc.json", ("a",))
        with pytest.raises(RuntimeError):
            with store.transaction() as document:
                document["a"].append({"id": "1"})
                raise RuntimeError("abort")
        assert store.read() == {"a": []}

    def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonDocumentStore(tmp_path / "doc.json", ("a",))
        with store.transaction() as document:
            document["a"].append({"id": "1"})
        names = sorted(p.name for p in tmp_path.iterdir())
        assert names == ["doc.json", "doc.json.lock"]

    def test_corrupt_file_is_unavailable(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonDocumentStore(path, ("a",))
        with pytest.raises(UnavailableError):
            store.read()

    def test_lock_timeout(self, tmp_path):
        store = JsonDocumentStore(tmp_path / "doc.json", ("a",), timeout=0.05)
        entered = threading.Event()
        release = threading.Event()

        def holder():
            with store.transaction():
                entered.set()
                release.wait(timeout=5)

        thread = threading.Thread(target=holder)
        thread.start()
        try:
            assert entered.wait(timeout=5)
            with pytest.raises(UnavailableError, match="Timed out"):
                store.read()
        finally:
            release.set()
            thread.join(timeout=5)

    def test_waits_for_lock_held_by_another_process(self, tmp_path):
        path = tmp_path / "doc.json"
        store = JsonDocumentStore(path, ("a",), timeout=0.05)
        # a second handle on the lock file stands in for another laman run
        with FileLock(lock_path_for(path)):
            with pytest.raises(UnavailableError, match="Timed out"):
                store.read()
            with pytest.raises(UnavailableError, match="Timed out"):
                with store.transaction():
                    pass
        assert store.read() == {"a": []}


class TestJsonProductRepository:

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "products.json"
        product = Product(
            id=uuid4(), name="Plov", price=Money.of("320.00"), weight=Decimal("0.6")
        )
        JsonProductRepository(path).save(product)

        loaded = JsonProductRepository(path).get_by_id(product.id)
        assert loaded == product

    def test_get_by_ids_skips_missing(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        a = Product(id=uuid4(), name="Plov", price=Money.of("320"))
        b = Product(id=uuid4(), name="Tea", price=Money.of("60"), is_available=False)
        repo.save(a)
        repo.save(b)

        found = repo.get_by_ids({a.id, b.id, uuid4()})

        assert {p.id for p in found} == {a.id, b.id}
        assert repo.get_by_name("tea").is_available is False

    def test_unreadable_catalog_is_unavailable(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(UnavailableError):
            JsonProductRepository(path).get_by_ids({uuid4()})

    def test_readers_never_see_a_partial_catalog(self, tmp_path):
        path = tmp_path / "products.json"
        writer_repo = JsonProductRepository(path)
        reader_repo = JsonProductRepository(path)
        products = [
            Product(id=uuid4(), name=f"Dish {n}", price=Money.of("100"))
            for n in range(30)
        ]
        done = threading.Event()
        errors = []

        def writer():
            try:
                for product in products:
                    writer_repo.save(product)
            finally:
                done.set()

        thread = threading.Thread(target=writer)
        thread.start()
        try:
            while not done.is_set():
                try:
                    reader_repo.list_all()
                except UnavailableError as exc:
                    errors.append(exc)
        finally:
            thread.join(timeout=10)

        assert errors == []
        assert len(reader_repo.list_all()) == len(products)

    def test_save_waits_for_lock(self, tmp_path):
        path = tmp_path / "products.json"
        repo = JsonProductRepository(path, timeout=0.05)
        with FileLock(lock_path_for(path)):
            with pytest.raises(UnavailableError, match="Timed out"):
                repo.save(Product(id=uuid4(), name="Plov", price=Money.of("320")))
        assert repo.list_all() == []
