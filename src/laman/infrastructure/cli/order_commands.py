"""CLI commands for the Order aggregate."""

from __future__ import annotations

import json
from uuid import UUID

import click

from laman.application.create_order import CreateOrderHandler
from laman.application.dto import OrderDTO
from laman.application.list_user_orders import ListUserOrdersHandler
from laman.application.show_order import ShowOrderHandler
from laman.application.update_order_status import UpdateOrderStatusHandler
from laman.domain.exceptions import DomainException
from laman.domain.model.order import OrderStatus
from laman.domain.model.order_request import OrderItemSpec, OrderRequest
from laman.domain.model.payment import PaymentMethod
from laman.infrastructure.bootstrap import (
    order_notifier,
    order_pricer,
    order_repository,
    product_repository,
)
from laman.infrastructure.cli.errors import fail


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '<product-id>:2,<product-id>:1' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_str, qty_str = pair.rsplit(":", 1)
        try:
            product_id = UUID(product_str.strip())
        except ValueError:
            raise click.BadParameter(f"Invalid product ID '{product_str}'.")
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_str}'."
            )
        specs.append(OrderItemSpec(product_id=product_id, quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer}")
    if dto.comment:
        click.echo(f"Comment:  {dto.comment}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<38} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*70}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<38} {item.quantity:>5} {item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*70}")
    click.echo(f"  {'Items':<45} {dto.items_total:>25}")
    click.echo(f"  {'Service fee':<45} {dto.service_fee:>25}")
    click.echo(f"  {'Delivery':<45} {dto.delivery_fee:>25}")
    click.echo(f"  {'Order Total':<45} {dto.final_total:>25}")


@click.command("create")
@click.option("--user-id", type=click.UUID, default=None, help="Registered user ID.")
@click.option("--guest-name", default=None, help="Guest name (guest orders).")
@click.option("--guest-phone", default=None, help="Guest phone (guest orders).")
@click.option("--guest-address", default=None, help="Guest address (guest orders).")
@click.option("--address", "delivery_address", required=True, help="Delivery address.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option(
    "--payment",
    "payment_method",
    type=click.Choice([m.value for m in PaymentMethod], case_sensitive=False),
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="Payment method.",
)
@click.option("--comment", default=None, help="Free-text comment for the courier.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the order as JSON.")
def order_create(
    user_id: UUID | None,
    guest_name: str | None,
    guest_phone: str | None,
    guest_address: str | None,
    delivery_address: str,
    items: str,
    payment_method: str,
    comment: str | None,
    as_json: bool,
) -> None:
    """Create a new order."""
    request = OrderRequest(
        items=_parse_items(items),
        payment_method=PaymentMethod(payment_method.upper()),
        delivery_address=delivery_address,
        user_id=user_id,
        guest_name=guest_name,
        guest_phone=guest_phone,
        guest_address=guest_address,
        comment=comment,
    )

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        pricer=order_pricer(),
        notifier=order_notifier(),
    )

    try:
        dto = handler.handle(request)
    except DomainException as exc:
        raise fail(exc)

    if as_json:
        click.echo(json.dumps(dto.to_dict(), ensure_ascii=False, indent=2))
        return
    click.echo("Order created.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=click.UUID, help="Order ID to display.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the order as JSON.")
def order_show(order_id: UUID, as_json: bool) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise fail(exc)

    if as_json:
        click.echo(json.dumps(dto.to_dict(), ensure_ascii=False, indent=2))
        return
    _display_order(dto)


@click.command("list")
@click.option("--user-id", required=True, type=click.UUID, help="Registered user ID.")
def order_list(user_id: UUID) -> None:
    """List a user's orders, newest first."""
    handler = ListUserOrdersHandler(order_repo=order_repository())

    try:
        orders = handler.handle(user_id)
    except DomainException as exc:
        raise fail(exc)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<38} {'Status':<20} {'Total':>14}  Created")
    click.echo("-" * 94)
    for o in orders:
        click.echo(f"{o.id:<38} {o.status:<20} {o.final_total:>14}  {o.created_at}")


@click.command("status")
@click.option("--id", "order_id", required=True, type=click.UUID, help="Order ID.")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="New status.",
)
def order_status(order_id: UUID, target: str) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(order_repo=order_repository())

    try:
        previous = handler.handle(order_id, target)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Order {order_id}: {previous.value} -> {target.upper()}")
