"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from orderproc.domain.model.order import Order
from orderproc.domain.model.payment import PaymentTransaction
from orderproc.domain.model.value_objects import ProductAvailability, format_money


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one requested line (product, quantity, unit price)."""

    product_id: str
    quantity: int
    unit_price: str | Decimal


@dataclass(frozen=True)
class AvailabilityDTO:
    product_id: str
    available_quantity: int
    reserved_quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    quantity: int
    unit_price: str  # formatted, e.g. "10.50"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: str
    customer_id: str
    status: str
    items: list[OrderItemDTO]
    total_amount: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PaymentDTO:
    transaction_id: str
    order_id: str
    amount: str
    method: str
    status: str
    processed_at: datetime


@dataclass(frozen=True)
class PaymentResult:
    """Output of a payment attempt: the stored record plus whether it went through."""

    transaction: PaymentDTO
    is_success: bool

    @property
    def message(self) -> str:
        if self.is_success:
            return "Payment processed successfully."
        return "Payment failed. Please try again."


# --- Mapping ------------------------------------------------------------------


def availability_to_dto(snapshot: ProductAvailability) -> AvailabilityDTO:
    return AvailabilityDTO(
        product_id=snapshot.product_id,
        available_quantity=snapshot.available_quantity,
        reserved_quantity=snapshot.reserved_quantity,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        status=order.status.value,
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=format_money(item.unit_price),
                line_total=format_money(item.line_total),
            )
            for item in order.items
        ],
        total_amount=format_money(order.total_amount),
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def payment_to_dto(transaction: PaymentTransaction) -> PaymentDTO:
    return PaymentDTO(
        transaction_id=transaction.transaction_id,
        order_id=transaction.order_id,
        amount=format_money(transaction.amount),
        method=transaction.method,
        status=transaction.status.value,
        processed_at=transaction.processed_at,
    )
