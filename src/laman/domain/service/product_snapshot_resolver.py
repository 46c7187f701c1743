"""Domain service: Product Snapshot Resolver.

Fetches the current catalog records for the products of one order in a
single batch.  Missing products are simply absent from the result; the
pricer decides what absence means.  A catalog that cannot be read raises
UnavailableError from the repository and is never reported as "missing".
"""

from __future__ import annotations

from uuid import UUID

from laman.domain.model.product import Product
from laman.domain.repository.product_repository import ProductRepository


class ProductSnapshotResolver:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def resolve(self, product_ids: set[UUID]) -> dict[UUID, Product]:
        if not product_ids:
            return {}
        products = self._product_repo.get_by_ids(product_ids)
        return {p.id: p for p in products if p.id in product_ids}
