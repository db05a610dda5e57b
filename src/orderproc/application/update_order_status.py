"""Application service: Update Order Status use case.

Status changes do not touch inventory, with one opt-in exception: when
``release_on_cancel`` is enabled, moving an order into CANCELLED returns
its items' reserved quantities to available before the order is saved.

Stock is given back at most once per order. An order moved out of
CANCELLED does not reserve again, so cancelling it a second time
releases nothing. If the save fails, the released stock is reserved
again before the error propagates.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from orderproc.application.dto import OrderDTO, order_to_dto
from orderproc.domain.exceptions import OrderNotFoundError
from orderproc.domain.model.order import Order, OrderStatus, utc_now
from orderproc.domain.repository.order_repository import OrderRepository
from orderproc.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from orderproc.logging_config import observed


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        reservations: InventoryReservationService | None = None,
        release_on_cancel: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if release_on_cancel and reservations is None:
            raise ValueError("release_on_cancel requires a reservation service")
        self._order_repo = order_repo
        self._reservations = reservations
        self._release_on_cancel = release_on_cancel
        self._clock = clock

    @observed("update_order_status")
    def handle(self, order_id: str, status_name: str) -> OrderDTO:
        # Parse first: an unknown status is rejected whether or not the
        # order exists.
        new_status = OrderStatus.parse(status_name)

        with self._order_repo.lock():
            return order_to_dto(self._update(order_id, new_status))

    def _update(self, order_id: str, new_status: OrderStatus) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        releasing = (
            self._release_on_cancel
            and new_status == OrderStatus.CANCELLED
            and order.status != OrderStatus.CANCELLED
            and order.reservation_held
        )
        if releasing:
            self._reservations.release_many(order.demands)  # type: ignore[union-attr]
            order.mark_reservation_released()

        order.update_status(new_status, self._clock())
        try:
            self._order_repo.save(order)
        except Exception:
            if releasing:
                self._reservations.reserve_many(order.demands)  # type: ignore[union-attr]
            raise
        return order
