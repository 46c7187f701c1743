import click

from laman.infrastructure.bootstrap import settings
from laman.infrastructure.cli.fulfillment_commands import (
    delivery_show,
    delivery_update,
    payment_show,
    payment_status,
)
from laman.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from laman.infrastructure.cli.product_commands import product_add, product_list, product_update
from laman.infrastructure.config import ConfigError
from laman.infrastructure.logging_config import add_context, clear_context, configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Laman: order processing for store deliveries."""
    try:
        cfg = settings()
    except ConfigError as exc:
        raise click.ClickException(str(exc))
    configure_logging(cfg.environment)
    clear_context()
    add_context(command=ctx.invoked_subcommand)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def delivery() -> None:
    """Manage deliveries."""


@cli.group()
def payment() -> None:
    """Manage payments."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
delivery.add_command(delivery_show)
delivery.add_command(delivery_update)
payment.add_command(payment_show)
payment.add_command(payment_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
