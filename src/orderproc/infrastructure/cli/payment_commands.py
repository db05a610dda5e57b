"""CLI commands for payments."""

from __future__ import annotations

import click

from orderproc.application.dto import PaymentDTO
from orderproc.application.process_payment import (
    GetPaymentStatusHandler,
    ProcessPaymentHandler,
)
from orderproc.config import get_settings
from orderproc.domain.exceptions import DomainException
from orderproc.infrastructure.bootstrap import (
    order_repository,
    payment_outcome,
    payment_repository,
)


def _display_payment(dto: PaymentDTO) -> None:
    click.echo(f"Transaction: {dto.transaction_id}")
    click.echo(f"Order:       {dto.order_id}")
    click.echo(f"Amount:      {dto.amount} via {dto.method}")
    click.echo(f"Status:      {dto.status}")


@click.command("process")
@click.option("--order", "order_id", required=True, help="Order ID to pay for.")
@click.option("--amount", required=True, help="Amount; must equal the order total.")
@click.option("--method", required=True, help="Payment method, e.g. CreditCard.")
def payment_process(order_id: str, amount: str, method: str) -> None:
    """Record a payment attempt for an order.

    Exits with status 1 when the payment is declined; the attempt is
    still recorded.
    """
    settings = get_settings()
    handler = ProcessPaymentHandler(
        order_repo=order_repository(),
        payment_repo=payment_repository(),
        decide_outcome=payment_outcome(),
        allowed_methods=settings.allowed_payment_methods,
    )

    try:
        result = handler.handle(order_id, amount, method)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(result.message)
    _display_payment(result.transaction)
    if not result.is_success:
        raise SystemExit(1)


@click.command("status")
@click.option("--id", "transaction_id", required=True, help="Transaction ID.")
def payment_status(transaction_id: str) -> None:
    """Show a recorded payment transaction."""
    handler = GetPaymentStatusHandler(payment_repo=payment_repository())

    try:
        dto = handler.handle(transaction_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_payment(dto)
