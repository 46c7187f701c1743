"""CLI commands for the delivery and payment records of an order."""

from __future__ import annotations

from uuid import UUID

import click

from laman.application.dto import DeliveryDTO, PaymentDTO
from laman.application.show_delivery import ShowDeliveryHandler
from laman.application.show_payment import ShowPaymentHandler
from laman.application.update_delivery import UpdateDeliveryHandler
from laman.application.update_payment_status import UpdatePaymentStatusHandler
from laman.domain.exceptions import DomainException
from laman.domain.model.payment import PaymentStatus
from laman.domain.model.value_objects import parse_decimal
from laman.infrastructure.bootstrap import delivery_repository, payment_repository
from laman.infrastructure.cli.errors import fail


def _display_delivery(dto: DeliveryDTO) -> None:
    click.echo(f"Delivery for order {dto.order_id}")
    click.echo(f"Address:  {dto.address}")
    click.echo(f"Distance: {dto.distance or '—'}")
    click.echo(f"Weight:   {dto.weight or '—'}")
    click.echo(f"Updated:  {dto.updated_at}")


def _display_payment(dto: PaymentDTO) -> None:
    click.echo(f"Payment for order {dto.order_id}")
    click.echo(f"Method: {dto.method}")
    click.echo(f"Status: {dto.status}")
    click.echo(f"Amount: {dto.amount}")


@click.command("show")
@click.option("--order-id", required=True, type=click.UUID, help="Order ID.")
def delivery_show(order_id: UUID) -> None:
    """Show the delivery record of an order."""
    handler = ShowDeliveryHandler(delivery_repo=delivery_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise fail(exc)

    _display_delivery(dto)


@click.command("update")
@click.option("--order-id", required=True, type=click.UUID, help="Order ID.")
@click.option("--address", default=None, help="Corrected delivery address.")
@click.option("--distance", default=None, help="Distance in km.")
@click.option("--weight", default=None, help="Total weight in kg.")
def delivery_update(
    order_id: UUID,
    address: str | None,
    distance: str | None,
    weight: str | None,
) -> None:
    """Update address, distance or weight of a delivery."""
    handler = UpdateDeliveryHandler(delivery_repo=delivery_repository())

    try:
        dto = handler.handle(
            order_id,
            address=address,
            distance=None if distance is None else parse_decimal(distance, "distance"),
            weight=None if weight is None else parse_decimal(weight, "weight"),
        )
    except DomainException as exc:
        raise fail(exc)

    _display_delivery(dto)


@click.command("show")
@click.option("--order-id", required=True, type=click.UUID, help="Order ID.")
def payment_show(order_id: UUID) -> None:
    """Show the payment record of an order."""
    handler = ShowPaymentHandler(payment_repo=payment_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise fail(exc)

    _display_payment(dto)


@click.command("status")
@click.option("--order-id", required=True, type=click.UUID, help="Order ID.")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice([s.value for s in PaymentStatus], case_sensitive=False),
    help="New payment status.",
)
def payment_status(order_id: UUID, target: str) -> None:
    """Record the outcome of a payment."""
    handler = UpdatePaymentStatusHandler(payment_repo=payment_repository())

    try:
        dto = handler.handle(order_id, target)
    except DomainException as exc:
        raise fail(exc)

    _display_payment(dto)
