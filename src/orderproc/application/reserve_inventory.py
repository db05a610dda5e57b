"""Application service: Reserve / Release Inventory use cases.

Direct single-product access to the reservation engine, outside of any
order.
"""

from __future__ import annotations

from orderproc.application.dto import AvailabilityDTO, availability_to_dto
from orderproc.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from orderproc.logging_config import observed


class ReserveInventoryHandler:

    def __init__(self, reservations: InventoryReservationService) -> None:
        self._reservations = reservations

    @observed("reserve_inventory")
    def handle(self, product_id: str, quantity: int) -> AvailabilityDTO:
        return availability_to_dto(self._reservations.reserve(product_id, quantity))


class ReleaseInventoryHandler:

    def __init__(self, reservations: InventoryReservationService) -> None:
        self._reservations = reservations

    @observed("release_inventory")
    def handle(self, product_id: str, quantity: int) -> AvailabilityDTO:
        return availability_to_dto(self._reservations.release(product_id, quantity))
