"""CLI commands for the Product aggregate."""

from __future__ import annotations

from uuid import UUID

import click

from laman.application.add_product import AddProductHandler
from laman.application.update_product import UpdateProductHandler
from laman.domain.exceptions import DomainException
from laman.infrastructure.bootstrap import product_repository
from laman.infrastructure.cli.errors import fail


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 100.00).")
@click.option("--weight", default=None, help="Weight per unit in kg.")
@click.option("--unavailable", is_flag=True, default=False, help="Add as out of stock.")
def product_add(name: str, price: str, weight: str | None, unavailable: bool) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name, price=price, weight=weight, available=not unavailable
        )
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    repo = product_repository()
    try:
        products = repo.list_all()
    except DomainException as exc:
        raise fail(exc)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<20} {'Price':>12} {'Weight':>8}  Available")
    click.echo("-" * 92)
    for p in products:
        weight = "—" if p.weight is None else str(p.weight)
        available = "yes" if p.is_available else "no"
        click.echo(f"{str(p.id):<38} {p.name:<20} {str(p.price):>12} {weight:>8}  {available}")


@click.command("update")
@click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 129.99).")
@click.option("--weight", default=None, help="New weight per unit in kg.")
@click.option("--available/--unavailable", default=None, help="Toggle availability.")
def product_update(
    product_id: UUID,
    price: str | None,
    weight: str | None,
    available: bool | None,
) -> None:
    """Update a product's price, weight or availability."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            product_id=product_id, new_price=price, available=available, weight=weight
        )
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Product {product.id} updated: {product.price}, available={product.is_available}")
