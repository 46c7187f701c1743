"""Application service: Update Product use case."""

from __future__ import annotations

from uuid import UUID

from laman.domain.exceptions import EntityNotFoundError, ValidationError
from laman.domain.model.product import Product
from laman.domain.model.value_objects import Money, parse_decimal
from laman.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: UUID,
        new_price: str | None = None,
        available: bool | None = None,
        weight: str | None = None,
    ) -> Product:
        """Update a product's price, availability or weight.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        if new_price is None and available is None and weight is None:
            raise ValidationError("Nothing to update")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if new_price is not None:
            product.update_price(Money.of(new_price))
        if available is not None:
            product.set_availability(available)
        if weight is not None:
            product.weight = parse_decimal(weight, "weight")
        self._product_repo.save(product)
        return product
