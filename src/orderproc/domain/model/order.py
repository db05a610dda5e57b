"""Order aggregate.

The Order is an aggregate root that owns its line items. A candidate
order (``id is None``) is what a caller submits; it becomes a persisted
order only through ``place()``, which the create-order workflow calls
after validation and inventory reservation have both succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from orderproc.domain.exceptions import InvalidStatusError, ValidationError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    SHIPPED = "Shipped"

    @classmethod
    def parse(cls, name: str | None) -> OrderStatus:
        """Resolve a status name case-insensitively ("shipped" -> SHIPPED)."""
        wanted = (name or "").strip().lower()
        for status in cls:
            if status.value.lower() == wanted:
                return status
        raise InvalidStatusError(f"Invalid status value: {name!r}")


@dataclass
class OrderItem:
    """One line of an order: product, quantity and the unit price charged."""

    product_id: str
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class Order:
    """Aggregate root for customer orders.

    ``total_amount`` is the total declared by the caller; it is checked
    against ``computed_total`` once at creation and never re-derived.
    """

    id: str | None
    customer_id: str
    items: list[OrderItem]
    total_amount: Decimal
    status: OrderStatus = OrderStatus.PENDING
    # False once the reserved stock has been given back on cancellation.
    reservation_held: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def computed_total(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def demands(self) -> list[tuple[str, int]]:
        """(product_id, quantity) pairs in item order."""
        return [(item.product_id, item.quantity) for item in self.items]

    # --- Lifecycle ------------------------------------------------------------

    def place(self, order_id: str, now: datetime) -> None:
        """Assign identity and start the lifecycle at PENDING."""
        if self.id is not None:
            raise ValidationError(f"Order {self.id} has already been placed")
        self.id = order_id
        self.status = OrderStatus.PENDING
        self.created_at = now
        self.updated_at = now

    def update_status(self, status: OrderStatus, now: datetime) -> None:
        self.status = status
        self.updated_at = now

    def mark_reservation_released(self) -> None:
        self.reservation_held = False
