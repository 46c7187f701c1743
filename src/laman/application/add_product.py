"""Application service: Add Product use case."""

from __future__ import annotations

from collections.abc import Callable
from uuid import UUID, uuid4

from laman.domain.exceptions import ValidationError
from laman.domain.model.product import Product
from laman.domain.model.value_objects import Money, parse_decimal
from laman.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._product_repo = product_repo
        self._new_id = id_factory

    def handle(
        self,
        name: str,
        price: str,
        weight: str | None = None,
        available: bool = True,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        money = Money.of(price)
        if money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        product = Product(
            id=self._new_id(),
            name=name.strip(),
            price=money,
            is_available=available,
            weight=None if weight is None else parse_decimal(weight, "weight"),
        )
        self._product_repo.save(product)
        return product
