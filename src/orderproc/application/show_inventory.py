"""Application service: inventory queries."""

from __future__ import annotations

from orderproc.application.dto import AvailabilityDTO, availability_to_dto
from orderproc.domain.service.inventory_store import InventoryStore
from orderproc.logging_config import observed


class GetAvailabilityHandler:

    def __init__(self, store: InventoryStore) -> None:
        self._store = store

    @observed("get_availability")
    def handle(self, product_id: str) -> AvailabilityDTO:
        """Return available/reserved quantities for one product.

        May be served from the availability cache.
        """
        return availability_to_dto(self._store.get_availability(product_id))


class ShowInventoryHandler:

    def __init__(self, store: InventoryStore) -> None:
        self._store = store

    @observed("show_inventory")
    def handle(self) -> list[AvailabilityDTO]:
        return [availability_to_dto(s) for s in self._store.list_availability()]
