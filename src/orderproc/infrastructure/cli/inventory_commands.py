"""CLI commands for inventory management."""

from __future__ import annotations

import click

from orderproc.application.dto import AvailabilityDTO
from orderproc.application.reserve_inventory import (
    ReleaseInventoryHandler,
    ReserveInventoryHandler,
)
from orderproc.application.show_inventory import (
    GetAvailabilityHandler,
    ShowInventoryHandler,
)
from orderproc.domain.exceptions import DomainException
from orderproc.infrastructure.bootstrap import inventory_store, reservation_service


def _display_lines(lines: list[AvailabilityDTO]) -> None:
    click.echo(f"{'Product':<20} {'Available':>10} {'Reserved':>10}")
    click.echo("-" * 42)
    for line in lines:
        click.echo(
            f"{line.product_id:<20} {line.available_quantity:>10} {line.reserved_quantity:>10}"
        )


@click.command("show")
@click.option("--product", "product_id", default=None, help="Product ID (omit for all).")
def inventory_show(product_id: str | None) -> None:
    """Show available and reserved quantities."""
    try:
        if product_id is not None:
            lines = [GetAvailabilityHandler(inventory_store()).handle(product_id)]
        else:
            lines = ShowInventoryHandler(inventory_store()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No inventory records found.")
        return
    _display_lines(lines)


@click.command("reserve")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to reserve.")
def inventory_reserve(product_id: str, quantity: int) -> None:
    """Move units from available to reserved."""
    handler = ReserveInventoryHandler(reservation_service())

    try:
        line = handler.handle(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Reserved {quantity} of {product_id}.")
    _display_lines([line])


@click.command("release")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to release.")
def inventory_release(product_id: str, quantity: int) -> None:
    """Move units from reserved back to available."""
    handler = ReleaseInventoryHandler(reservation_service())

    try:
        line = handler.handle(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Released {quantity} of {product_id}.")
    _display_lines([line])
