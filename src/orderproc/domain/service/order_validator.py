"""Domain service: structural validation of a candidate order.

Pure function, no I/O. Inventory existence and sufficiency are checked
later by the reservation service, not here.
"""

from __future__ import annotations

from decimal import Decimal

from orderproc.domain.exceptions import (
    EmptyOrderError,
    InvalidItemError,
    MissingCustomerError,
    TotalMismatchError,
)
from orderproc.domain.model.order import Order


def validate_order(candidate: Order) -> None:
    """Raise the first rule the candidate order violates.

    Checks, in order: customer present, at least one item, every item
    has a product, a positive quantity and a positive unit price, and
    the declared total equals the sum of the line totals exactly.
    """
    if not candidate.customer_id or not candidate.customer_id.strip():
        raise MissingCustomerError("Customer ID is required")

    if not candidate.items:
        raise EmptyOrderError("Order must contain at least one item")

    for position, item in enumerate(candidate.items, start=1):
        if not item.product_id or not item.product_id.strip():
            raise InvalidItemError(f"Item {position} has no product ID")
        if (
            isinstance(item.quantity, bool)
            or not isinstance(item.quantity, int)
            or item.quantity <= 0
            or not isinstance(item.unit_price, Decimal)
            or not item.unit_price.is_finite()
            or item.unit_price <= 0
        ):
            raise InvalidItemError(
                "Each item must have a positive quantity and unit price "
                f"(item {position}: product {item.product_id}, "
                f"quantity {item.quantity}, unit price {item.unit_price})"
            )

    computed = candidate.computed_total
    if candidate.total_amount != computed:
        raise TotalMismatchError(
            f"TotalAmount ({candidate.total_amount}) does not match "
            f"sum of items ({computed})"
        )
