"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from collections.abc import Iterable
from decimal import Decimal
from pathlib import Path
from uuid import UUID

from laman.domain.exceptions import UnavailableError
from laman.domain.model.product import Product
from laman.domain.model.value_objects import Money
from laman.domain.repository.product_repository import ProductRepository
from laman.infrastructure.persistence.json_store import atomic_write, exclusive


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, timeout: float = 5.0) -> None:
        self._file_path = file_path
        self._timeout = timeout
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: UUID) -> Product | None:
        return self._load().get(product_id)

    def get_by_ids(self, product_ids: Iterable[UUID]) -> list[Product]:
        wanted = set(product_ids)
        return [p for p in self._load().values() if p.id in wanted]

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        with exclusive(self._file_path, self._timeout):
            products = self._load()
            products[product.id] = product
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[UUID, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise UnavailableError(f"Cannot read catalog {self._file_path}: {exc}") from exc
        return {
            UUID(item["id"]): Product(
                id=UUID(item["id"]),
                name=item["name"],
                price=Money(Decimal(item["price"]), item.get("currency", "RUB")),
                is_available=item.get("is_available", True),
                weight=None if item.get("weight") is None else Decimal(item["weight"]),
            )
            for item in raw
        }

    def _persist(self, products: dict[UUID, Product]) -> None:
        raw = [
            {
                "id": str(p.id),
                "name": p.name,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "is_available": p.is_available,
                "weight": None if p.weight is None else str(p.weight),
            }
            for p in products.values()
        ]
        atomic_write(self._file_path, json.dumps(raw, indent=2, ensure_ascii=False) + "\n")

    def _ensure_file(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with exclusive(self._file_path, self._timeout):
            if not self._file_path.exists():
                atomic_write(self._file_path, "[]\n")
