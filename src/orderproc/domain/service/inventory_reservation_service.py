"""Domain service: Inventory Reservation.

Moves units between the *available* and *reserved* buckets of inventory
rows, one product at a time or for a whole order at once.

Multi-item operations are all-or-nothing. They hold the row locks of
every product involved and use a two-phase approach:

  Phase 1 — validate: every demand is checked against the current rows
            (cumulatively, if a product appears more than once).  The
            first failing demand raises before anything is mutated.
  Phase 2 — apply: each demand is committed through the store.  If a
            commit fails part-way, the demands already applied in this
            call are reversed before the error propagates.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from orderproc.domain.exceptions import (
    InsufficientAvailableError,
    InsufficientReservedError,
)
from orderproc.domain.model.inventory import require_positive_quantity
from orderproc.domain.model.value_objects import ProductAvailability
from orderproc.domain.service.inventory_store import InventoryStore

logger = logging.getLogger(__name__)

Demand = tuple[str, int]


class InventoryReservationService:

    def __init__(self, store: InventoryStore) -> None:
        self._store = store

    # --- Single product -------------------------------------------------------

    def reserve(self, product_id: str, quantity: int) -> ProductAvailability:
        """Reserve *quantity* units of one product.

        Raises ProductNotFoundError, InvalidQuantityError or
        InsufficientAvailableError, in that order of precedence.
        """
        with self._store.locked(product_id):
            self._store.read(product_id)
            require_positive_quantity(quantity)
            return self._store.adjust(product_id, -quantity, quantity)

    def release(self, product_id: str, quantity: int) -> ProductAvailability:
        """Release *quantity* previously reserved units of one product.

        Raises ProductNotFoundError, InvalidQuantityError or
        InsufficientReservedError, in that order of precedence.
        """
        with self._store.locked(product_id):
            self._store.read(product_id)
            require_positive_quantity(quantity)
            return self._store.adjust(product_id, quantity, -quantity)

    # --- Many products --------------------------------------------------------

    def reserve_many(self, demands: Iterable[Demand]) -> list[ProductAvailability]:
        """Reserve every (product_id, quantity) demand, or none of them."""
        return self._transfer_many(list(demands), reserving=True)

    def release_many(self, demands: Iterable[Demand]) -> list[ProductAvailability]:
        """Release every (product_id, quantity) demand, or none of them."""
        return self._transfer_many(list(demands), reserving=False)

    def _transfer_many(
        self, demands: list[Demand], reserving: bool
    ) -> list[ProductAvailability]:
        with self._store.locked(*(product_id for product_id, _ in demands)):
            self._validate_all(demands, reserving)

            applied: list[Demand] = []
            snapshots: list[ProductAvailability] = []
            try:
                for product_id, quantity in demands:
                    snapshots.append(self._apply(product_id, quantity, reserving))
                    applied.append((product_id, quantity))
            except Exception:
                self._compensate(applied, reserving)
                raise
            return snapshots

    def _validate_all(self, demands: list[Demand], reserving: bool) -> None:
        claimed: dict[str, int] = {}
        for product_id, quantity in demands:
            item = self._store.read(product_id)
            require_positive_quantity(quantity)

            already = claimed.get(product_id, 0)
            if reserving:
                remaining = item.available_quantity - already
                if quantity > remaining:
                    raise InsufficientAvailableError(product_id, quantity, remaining)
            else:
                remaining = item.reserved_quantity - already
                if quantity > remaining:
                    raise InsufficientReservedError(product_id, quantity, remaining)
            claimed[product_id] = already + quantity

    def _apply(
        self, product_id: str, quantity: int, reserving: bool
    ) -> ProductAvailability:
        if reserving:
            return self._store.adjust(product_id, -quantity, quantity)
        return self._store.adjust(product_id, quantity, -quantity)

    def _compensate(self, applied: list[Demand], reserving: bool) -> None:
        for product_id, quantity in reversed(applied):
            try:
                self._apply(product_id, quantity, not reserving)
            except Exception:
                # Keep undoing the rest; the original error is re-raised
                # by the caller.
                logger.exception(
                    "Failed to undo %s of %d units for product %s",
                    "reservation" if reserving else "release",
                    quantity,
                    product_id,
                )
