"""Unit tests for the ProductSnapshotResolver domain service."""

from uuid import uuid4

import pytest

from laman.domain.exceptions import UnavailableError
from laman.domain.model.product import Product
from laman.domain.model.value_objects import Money
from laman.domain.service.product_snapshot_resolver import ProductSnapshotResolver
from tests.fakes import FakeProductRepository


class TestProductSnapshotResolver:

    def _setup(self):
        a = Product(id=uuid4(), name="Plov", price=Money.of("300"))
        b = Product(id=uuid4(), name="Bread", price=Money.of("40"))
        repo = FakeProductRepository([a, b])
        return ProductSnapshotResolver(repo), repo, a, b

    def test_resolves_in_one_batch(self):
        resolver, repo, a, b = self._setup()
        result = resolver.resolve({a.id, b.id})
        assert result == {a.id: a, b.id: b}
        assert repo.batch_lookups == [{a.id, b.id}]

    def test_missing_products_are_absent(self):
        resolver, _, a, _ = self._setup()
        missing = uuid4()
        result = resolver.resolve({a.id, missing})
        assert set(result) == {a.id}

    def test_empty_set_skips_lookup(self):
        resolver, repo, _, _ = self._setup()
        assert resolver.resolve(set()) == {}
        assert repo.batch_lookups == []

    def test_lookup_failure_propagates(self):
        resolver, repo, a, _ = self._setup()
        repo.unavailable = True
        with pytest.raises(UnavailableError):
            resolver.resolve({a.id})
