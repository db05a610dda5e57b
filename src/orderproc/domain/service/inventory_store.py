"""Inventory Store — the single writer of inventory rows.

Wraps an ``InventoryRepository`` with the two things plain persistence
does not give us:

- per-row locking (plus the repository's lock, for stores shared
  between processes), so concurrent read-modify-write on the same
  product is serialized and a bucket can never be driven negative;
- a read-through availability cache with a bounded freshness window.
  Every committed ``adjust`` replaces the cached entry, so a read after
  a mutation never observes the old quantities.

The cache is never the system of record: ``read()`` and ``adjust()``
always go to the repository.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterator
from contextlib import ExitStack, contextmanager
from dataclasses import replace

from cachetools import TTLCache

from orderproc.domain.exceptions import ProductNotFoundError
from orderproc.domain.model.inventory import InventoryItem
from orderproc.domain.model.value_objects import ProductAvailability
from orderproc.domain.repository.inventory_repository import InventoryRepository

DEFAULT_CACHE_TTL_SECONDS = 300.0
DEFAULT_CACHE_SIZE = 1024


class _KeyLock:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users = 0


class KeyedLock:
    """One reentrant lock per key.

    ``hold()`` takes several keys at once, always in sorted order, so two
    callers locking overlapping key sets cannot deadlock. A key's lock
    only exists while some caller holds or waits for it.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, _KeyLock] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def _hold_one(self, key: str) -> Iterator[None]:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _KeyLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[key]

    @contextmanager
    def hold(self, *keys: str) -> Iterator[None]:
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                stack.enter_context(self._hold_one(key))
            yield


class AvailabilityCache:
    """Thread-safe TTL cache of ``ProductAvailability`` keyed by product id.

    A non-positive TTL disables caching entirely.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        maxsize: int = DEFAULT_CACHE_SIZE,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._enabled = ttl_seconds > 0
        self._lock = threading.Lock()
        self._entries: TTLCache = TTLCache(
            maxsize=max(maxsize, 1), ttl=max(ttl_seconds, 0), timer=timer
        )

    def get(self, product_id: str) -> ProductAvailability | None:
        if not self._enabled:
            return None
        with self._lock:
            return self._entries.get(product_id)

    def put(self, snapshot: ProductAvailability) -> None:
        if not self._enabled:
            return
        with self._lock:
            self._entries[snapshot.product_id] = snapshot

    def invalidate(self, product_id: str) -> None:
        with self._lock:
            self._entries.pop(product_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class InventoryStore:

    def __init__(
        self,
        repository: InventoryRepository,
        cache: AvailabilityCache | None = None,
    ) -> None:
        self._repository = repository
        self._cache = cache if cache is not None else AvailabilityCache()
        self._locks = KeyedLock()

    # --- Reads ----------------------------------------------------------------

    def get_availability(self, product_id: str) -> ProductAvailability:
        """Return the availability of a product, from cache when fresh."""
        cached = self._cache.get(product_id)
        if cached is not None:
            return cached

        # Populate under the row lock so a concurrent adjust cannot be
        # overwritten by the snapshot we are about to cache.
        with self._locks.hold(product_id):
            snapshot = self.read(product_id).snapshot()
            self._cache.put(snapshot)
            return snapshot

    def list_availability(self) -> list[ProductAvailability]:
        items = sorted(self._repository.list_all(), key=lambda i: i.product_id)
        return [item.snapshot() for item in items]

    def read(self, product_id: str) -> InventoryItem:
        """Return the authoritative row, bypassing the cache."""
        item = self._repository.get_by_product_id(product_id)
        if item is None:
            raise ProductNotFoundError(product_id)
        return item

    # --- Writes ---------------------------------------------------------------

    def adjust(
        self, product_id: str, available_delta: int, reserved_delta: int
    ) -> ProductAvailability:
        """Atomically apply both deltas to one row and persist it.

        Raises InsufficientAvailableError / InsufficientReservedError if a
        bucket would go negative; the row is left untouched.
        """
        with self.locked(product_id):
            updated = replace(self.read(product_id))
            updated.adjust(available_delta, reserved_delta)
            self._repository.save(updated)
            snapshot = updated.snapshot()
            self._cache.put(snapshot)
            return snapshot

    @contextmanager
    def locked(self, *product_ids: str) -> Iterator[None]:
        """Hold the row locks of *product_ids* for a multi-row sequence.

        The repository's own lock is taken after the row locks, so other
        processes sharing the store are kept out too. Both are reentrant,
        so ``adjust`` may be called inside the block.
        """
        with self._locks.hold(*product_ids), self._repository.lock():
            yield
