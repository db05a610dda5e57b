import click

from orderproc.config import get_settings
from orderproc.infrastructure.cli.inventory_commands import (
    inventory_release,
    inventory_reserve,
    inventory_show,
)
from orderproc.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from orderproc.infrastructure.cli.payment_commands import (
    payment_process,
    payment_status,
)
from orderproc.logging_config import setup_logging


@click.group()
@click.option("--log-level", default=None, help="Override the configured log level.")
def cli(log_level: str | None) -> None:
    """orderproc — Order Processing Service"""
    settings = get_settings()
    setup_logging(level=log_level or settings.log_level, fmt=settings.log_format)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


@cli.group()
def payment() -> None:
    """Process payments."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
inventory.add_command(inventory_release)
inventory.add_command(inventory_reserve)
inventory.add_command(inventory_show)
payment.add_command(payment_process)
payment.add_command(payment_status)
