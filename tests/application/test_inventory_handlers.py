"""Integration tests for the inventory use cases."""

import pytest

from orderproc.application.reserve_inventory import (
    ReleaseInventoryHandler,
    ReserveInventoryHandler,
)
from orderproc.application.show_inventory import (
    GetAvailabilityHandler,
    ShowInventoryHandler,
)
from orderproc.domain.exceptions import (
    InsufficientAvailableError,
    InsufficientReservedError,
    InvalidQuantityError,
    ProductNotFoundError,
)
from orderproc.domain.model.inventory import InventoryItem
from orderproc.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from orderproc.domain.service.inventory_store import InventoryStore
from tests.fakes import FakeInventoryRepository


def _setup():
    store = InventoryStore(FakeInventoryRepository([
        InventoryItem("PROD001", 10),
        InventoryItem("PROD002", 5, 5),
    ]))
    return store, InventoryReservationService(store)


class TestAvailabilityQueries:

    def test_get_availability(self):
        store, _ = _setup()
        dto = GetAvailabilityHandler(store).handle("PROD002")
        assert (dto.product_id, dto.available_quantity, dto.reserved_quantity) == ("PROD002", 5, 5)

    def test_get_availability_unknown(self):
        store, _ = _setup()
        with pytest.raises(ProductNotFoundError, match="PROD999 not found"):
            GetAvailabilityHandler(store).handle("PROD999")

    def test_show_inventory(self):
        store, _ = _setup()
        assert [d.product_id for d in ShowInventoryHandler(store).handle()] == ["PROD001", "PROD002"]


class TestReserveRelease:

    def test_reserve_then_read_sees_new_quantities(self):
        store, reservations = _setup()
        GetAvailabilityHandler(store).handle("PROD001")  # warm the cache

        ReserveInventoryHandler(reservations).handle("PROD001", 4)

        dto = GetAvailabilityHandler(store).handle("PROD001")
        assert (dto.available_quantity, dto.reserved_quantity) == (6, 4)

    def test_reserve_errors(self):
        _, reservations = _setup()
        handler = ReserveInventoryHandler(reservations)
        with pytest.raises(InvalidQuantityError):
            handler.handle("PROD001", 0)
        with pytest.raises(InsufficientAvailableError):
            handler.handle("PROD001", 11)
        with pytest.raises(ProductNotFoundError):
            handler.handle("PROD999", 1)

    def test_release(self):
        _, reservations = _setup()
        dto = ReleaseInventoryHandler(reservations).handle("PROD002", 5)
        assert (dto.available_quantity, dto.reserved_quantity) == (10, 0)

    def test_release_more_than_reserved(self):
        _, reservations = _setup()
        with pytest.raises(InsufficientReservedError):
            ReleaseInventoryHandler(reservations).handle("PROD002", 6)
