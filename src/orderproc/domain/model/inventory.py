"""InventoryItem aggregate — tracks free and reserved stock per product.

Each product has one InventoryItem. Units are either *available* (free to
reserve) or *reserved* (committed to an order); reserve and release move
units between the two buckets, so their sum never changes.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderproc.domain.exceptions import (
    InsufficientAvailableError,
    InsufficientReservedError,
    InvalidQuantityError,
)
from orderproc.domain.model.value_objects import ProductAvailability


@dataclass
class InventoryItem:
    """Aggregate root for inventory tracking.

    Invariants:
    - ``available_quantity`` is always >= 0
    - ``reserved_quantity`` is always >= 0
    """

    product_id: str
    available_quantity: int
    reserved_quantity: int = 0

    def reserve(self, quantity: int) -> None:
        """Move *quantity* units from available to reserved."""
        require_positive_quantity(quantity)
        self.adjust(-quantity, quantity)

    def release(self, quantity: int) -> None:
        """Move *quantity* units from reserved back to available."""
        require_positive_quantity(quantity)
        self.adjust(quantity, -quantity)

    def adjust(self, available_delta: int, reserved_delta: int) -> None:
        """Apply both deltas, or neither if a bucket would go negative."""
        new_available = self.available_quantity + available_delta
        new_reserved = self.reserved_quantity + reserved_delta
        if new_available < 0:
            raise InsufficientAvailableError(
                self.product_id, -available_delta, self.available_quantity
            )
        if new_reserved < 0:
            raise InsufficientReservedError(
                self.product_id, -reserved_delta, self.reserved_quantity
            )
        self.available_quantity = new_available
        self.reserved_quantity = new_reserved

    def snapshot(self) -> ProductAvailability:
        return ProductAvailability(
            product_id=self.product_id,
            available_quantity=self.available_quantity,
            reserved_quantity=self.reserved_quantity,
        )


def require_positive_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantityError("Quantity must be greater than zero")
