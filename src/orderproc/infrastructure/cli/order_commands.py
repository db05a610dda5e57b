"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderproc.application.create_order import CreateOrderHandler
from orderproc.application.dto import OrderDTO, OrderItemSpec
from orderproc.application.show_order import ListOrdersHandler, ShowOrderHandler
from orderproc.application.update_order_status import UpdateOrderStatusHandler
from orderproc.config import get_settings
from orderproc.domain.exceptions import DomainException
from orderproc.infrastructure.bootstrap import order_repository, reservation_service

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'PROD001:2:10.50,PROD002:1:4.00' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        parts = entry.rsplit(":", 2)
        if len(parts) != 3:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ProductId:Quantity:UnitPrice'."
            )
        product_id, qty_str, price = parts
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(
            OrderItemSpec(product_id=product_id.strip(), quantity=qty, unit_price=price.strip())
        )
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at.strftime(TIMESTAMP_FORMAT)}")
    click.echo(f"Updated:  {dto.updated_at.strftime(TIMESTAMP_FORMAT)}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total_amount:>20}")


@click.command("create")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty:UnitPrice,...'.")
@click.option("--total", required=True, help="Declared order total (e.g. 21.00).")
def order_create(customer: str, items: str, total: str) -> None:
    """Create an order, reserving inventory for every item."""
    specs = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        reservations=reservation_service(),
    )

    try:
        dto = handler.handle(customer_id=customer, item_specs=specs, total_amount=total)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order created — inventory reserved.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int, help="Page number.")
@click.option("--page-size", default=None, type=int, help="Orders per page.")
def order_list(page: int, page_size: int | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(
        order_repo=order_repository(),
        default_page_size=get_settings().default_page_size,
    )
    orders = handler.handle(page=page, page_size=page_size)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<38} {'Customer':<16} {'Status':<10} {'Total':>10} {'Created':>24}")
    click.echo("-" * 102)
    for dto in orders:
        click.echo(
            f"{dto.id:<38} {dto.customer_id:<16} {dto.status:<10} "
            f"{dto.total_amount:>10} {dto.created_at.strftime(TIMESTAMP_FORMAT):>24}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--status", "status_name", required=True,
              help="Pending, Completed, Cancelled or Shipped.")
def order_status(order_id: str, status_name: str) -> None:
    """Change the status of an order."""
    settings = get_settings()
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        reservations=reservation_service(),
        release_on_cancel=settings.release_on_cancel,
    )

    try:
        dto = handler.handle(order_id, status_name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} status updated to {dto.status}.")
