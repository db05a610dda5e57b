"""Application service: Create Order use case.

This is the only place that coordinates the Order aggregate with
inventory. An order is stored if and only if stock was reserved for
every one of its items:

1. Validate the candidate (pure, no side effects).
2. Reserve all items at once (all-or-nothing).
3. Assign identity and timestamps, status PENDING, and persist.
   If any of that fails, give the reserved stock back.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from orderproc.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from orderproc.domain.model.order import Order, OrderItem, utc_now
from orderproc.domain.model.value_objects import to_decimal
from orderproc.domain.repository.order_repository import OrderRepository
from orderproc.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from orderproc.domain.service.order_validator import validate_order
from orderproc.logging_config import observed


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        reservations: InventoryReservationService,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._reservations = reservations
        self._clock = clock

    @observed("create_order")
    def handle(
        self,
        customer_id: str,
        item_specs: list[OrderItemSpec],
        total_amount: str | int | float,
    ) -> OrderDTO:
        candidate = Order(
            id=None,
            customer_id=customer_id,
            items=[
                OrderItem(
                    product_id=spec.product_id,
                    quantity=spec.quantity,
                    unit_price=to_decimal(spec.unit_price),
                )
                for spec in item_specs or []
            ],
            total_amount=to_decimal(total_amount),
        )

        validate_order(candidate)

        demands = candidate.demands
        self._reservations.reserve_many(demands)

        try:
            candidate.place(self._order_repo.next_id(), self._clock())
            self._order_repo.save(candidate)
        except Exception:
            self._reservations.release_many(demands)
            raise

        return order_to_dto(candidate)
