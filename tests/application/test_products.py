"""Integration tests for the catalog use cases."""

from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from laman.application.add_product import AddProductHandler
from laman.application.update_product import UpdateProductHandler
from laman.domain.exceptions import EntityNotFoundError, ValidationError
from laman.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository


def _setup():
    repo = FakeProductRepository()
    return AddProductHandler(repo, id_factory=lambda: UUID(int=9)), repo


class TestAddProduct:

    def test_adds_product(self):
        handler, repo = _setup()
        product = handler.handle("  Plov ", "320.00", weight="0.6")
        assert product.id == UUID(int=9)
        assert product.name == "Plov"
        assert product.price == Money.of("320.00")
        assert product.weight == Decimal("0.6")
        assert product.is_available
        assert repo.get_by_id(product.id) is product

    def test_added_unavailable(self):
        handler, _ = _setup()
        assert not handler.handle("Plov", "320", available=False).is_available

    def test_duplicate_name_rejected(self):
        handler, _ = _setup()
        handler.handle("Plov", "320")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("plov", "300")

    def test_blank_name_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="name is required"):
            handler.handle("  ", "10")

    def test_zero_price_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="greater than zero"):
            handler.handle("Water", "0")

    def test_negative_weight_rejected(self):
        handler, repo = _setup()
        with pytest.raises(ValidationError, match="Weight cannot be negative"):
            handler.handle("Water", "10", weight="-1")
        assert repo.list_all() == []


class TestUpdateProduct:

    def test_changes_price_and_availability(self):
        add, repo = _setup()
        product = add.handle("Plov", "320")
        updated = UpdateProductHandler(repo).handle(
            product.id, new_price="350", available=False
        )
        assert updated.price == Money.of("350")
        assert not updated.is_available

    def test_sets_weight(self):
        add, repo = _setup()
        product = add.handle("Plov", "320")
        UpdateProductHandler(repo).handle(product.id, weight="0.75")
        assert repo.get_by_id(product.id).weight == Decimal("0.75")

    def test_nothing_to_update(self):
        _, repo = _setup()
        with pytest.raises(ValidationError, match="Nothing to update"):
            UpdateProductHandler(repo).handle(uuid4())

    def test_unknown_product(self):
        _, repo = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(repo).handle(uuid4(), new_price="10")
