"""Integration tests for the UpdateOrderStatus use case."""

import pytest

from orderproc.application.create_order import CreateOrderHandler
from orderproc.application.dto import OrderItemSpec
from orderproc.application.update_order_status import UpdateOrderStatusHandler
from orderproc.domain.exceptions import InvalidStatusError, OrderNotFoundError
from orderproc.domain.model.inventory import InventoryItem
from orderproc.domain.model.order import OrderStatus
from orderproc.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from orderproc.domain.service.inventory_store import InventoryStore
from tests.fakes import FakeClock, FakeInventoryRepository, FakeOrderRepository


def _setup():
    clock = FakeClock()
    order_repo = FakeOrderRepository()
    store = InventoryStore(FakeInventoryRepository([InventoryItem("PROD001", 100)]))
    reservations = InventoryReservationService(store)
    create = CreateOrderHandler(order_repo, reservations, clock=clock)
    dto = create.handle("customer123", [OrderItemSpec("PROD001", 2, "10")], "20")
    return dto.id, order_repo, store, reservations, clock


def _availability(store):
    snap = store.get_availability("PROD001")
    return snap.available_quantity, snap.reserved_quantity


class TestUpdateOrderStatus:

    def test_shipped_updates_status_and_timestamp(self):
        order_id, order_repo, _, _, clock = _setup()
        handler = UpdateOrderStatusHandler(order_repo, clock=clock)

        dto = handler.handle(order_id, "Shipped")

        assert dto.status == "Shipped"
        assert dto.updated_at > dto.created_at
        assert order_repo.get_by_id(order_id).status == OrderStatus.SHIPPED

    def test_status_name_is_case_insensitive(self):
        order_id, order_repo, _, _, clock = _setup()
        dto = UpdateOrderStatusHandler(order_repo, clock=clock).handle(order_id, "completed")
        assert dto.status == "Completed"

    def test_bogus_status_rejected_for_existing_order(self):
        order_id, order_repo, _, _, _ = _setup()
        with pytest.raises(InvalidStatusError):
            UpdateOrderStatusHandler(order_repo).handle(order_id, "Bogus")
        assert order_repo.get_by_id(order_id).status == OrderStatus.PENDING

    def test_bogus_status_rejected_for_missing_order(self):
        _, order_repo, _, _, _ = _setup()
        with pytest.raises(InvalidStatusError):
            UpdateOrderStatusHandler(order_repo).handle("missing", "Bogus")

    def test_unknown_order(self):
        _, order_repo, _, _, _ = _setup()
        with pytest.raises(OrderNotFoundError):
            UpdateOrderStatusHandler(order_repo).handle("missing", "Shipped")


class TestCancellationRelease:

    def test_cancel_keeps_reservation_by_default(self):
        order_id, order_repo, store, reservations, _ = _setup()
        handler = UpdateOrderStatusHandler(order_repo, reservations)

        handler.handle(order_id, "Cancelled")

        assert _availability(store) == (98, 2)

    def test_cancel_releases_when_enabled(self):
        order_id, order_repo, store, reservations, _ = _setup()
        handler = UpdateOrderStatusHandler(order_repo, reservations, release_on_cancel=True)

        dto = handler.handle(order_id, "Cancelled")

        assert dto.status == "Cancelled"
        assert _availability(store) == (100, 0)

    def test_cancelling_twice_releases_once(self):
        order_id, order_repo, store, reservations, _ = _setup()
        handler = UpdateOrderStatusHandler(order_repo, reservations, release_on_cancel=True)

        handler.handle(order_id, "Cancelled")
        handler.handle(order_id, "cancelled")

        assert _availability(store) == (100, 0)

    def test_other_transitions_do_not_release(self):
        order_id, order_repo, store, reservations, _ = _setup()
        handler = UpdateOrderStatusHandler(order_repo, reservations, release_on_cancel=True)

        handler.handle(order_id, "Shipped")

        assert _availability(store) == (98, 2)

    def test_release_on_cancel_requires_reservations(self):
        with pytest.raises(ValueError, match="requires a reservation service"):
            UpdateOrderStatusHandler(FakeOrderRepository(), release_on_cancel=True)

    def test_cancel_after_reopening_releases_nothing_more(self):
        order_id, order_repo, store, reservations, clock = _setup()
        other = CreateOrderHandler(order_repo, reservations, clock=clock).handle(
            "customer456", [OrderItemSpec("PROD001", 2, "10")], "20"
        )
        handler = UpdateOrderStatusHandler(order_repo, reservations, release_on_cancel=True)

        handler.handle(order_id, "Cancelled")
        handler.handle(order_id, "Pending")
        handler.handle(order_id, "Cancelled")

        # the other order still holds its two units
        assert _availability(store) == (98, 2)
        assert order_repo.get_by_id(other.id).reservation_held
        assert not order_repo.get_by_id(order_id).reservation_held

    def test_failed_save_restores_reservation(self):
        order_id, order_repo, store, reservations, _ = _setup()
        handler = UpdateOrderStatusHandler(order_repo, reservations, release_on_cancel=True)
        order_repo.fail_saves = True

        with pytest.raises(OSError):
            handler.handle(order_id, "Cancelled")

        assert _availability(store) == (98, 2)
        stored = order_repo.get_by_id(order_id)
        assert stored.status == OrderStatus.PENDING
        assert stored.reservation_held

    def test_retry_after_failed_save_releases_once(self):
        order_id, order_repo, store, reservations, _ = _setup()
        handler = UpdateOrderStatusHandler(order_repo, reservations, release_on_cancel=True)
        order_repo.fail_saves = True
        with pytest.raises(OSError):
            handler.handle(order_id, "Cancelled")

        order_repo.fail_saves = False
        handler.handle(order_id, "Cancelled")

        assert _availability(store) == (100, 0)
