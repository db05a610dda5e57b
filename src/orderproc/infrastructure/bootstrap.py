"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Factories are cached so the whole process shares one InventoryStore
(and therefore one set of row locks and one availability cache).
"""

from __future__ import annotations

from functools import lru_cache

from orderproc.config import get_settings
from orderproc.domain.model.inventory import InventoryItem
from orderproc.domain.repository.inventory_repository import InventoryRepository
from orderproc.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from orderproc.domain.service.inventory_store import AvailabilityCache, InventoryStore
from orderproc.domain.service.payment_outcome import (
    PaymentOutcomeDecider,
    outcome_from_name,
)
from orderproc.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from orderproc.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from orderproc.infrastructure.persistence.json_payment_repository import (
    JsonPaymentRepository,
)

# Stock loaded into an empty inventory on first start.
SEED_INVENTORY = (
    ("PROD001", 100),
    ("PROD002", 50),
    ("PROD003", 25),
)


def seed_inventory(repo: InventoryRepository) -> None:
    with repo.lock():
        if repo.list_all():
            return
        for product_id, available in SEED_INVENTORY:
            repo.save(InventoryItem(product_id=product_id, available_quantity=available))


@lru_cache
def inventory_repository() -> JsonInventoryRepository:
    repo = JsonInventoryRepository(get_settings().data_dir / "inventory.json")
    seed_inventory(repo)
    return repo


@lru_cache
def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")


@lru_cache
def payment_repository() -> JsonPaymentRepository:
    return JsonPaymentRepository(get_settings().data_dir / "payments.json")


@lru_cache
def inventory_store() -> InventoryStore:
    settings = get_settings()
    cache = AvailabilityCache(
        ttl_seconds=settings.availability_cache_ttl_seconds,
        maxsize=settings.availability_cache_size,
    )
    return InventoryStore(inventory_repository(), cache)


def reservation_service() -> InventoryReservationService:
    return InventoryReservationService(inventory_store())


def payment_outcome() -> PaymentOutcomeDecider:
    return outcome_from_name(get_settings().payment_outcome)


def reset() -> None:
    """Drop every cached component and the cached settings."""
    for factory in (
        inventory_repository,
        order_repository,
        payment_repository,
        inventory_store,
        get_settings,
    ):
        factory.cache_clear()
