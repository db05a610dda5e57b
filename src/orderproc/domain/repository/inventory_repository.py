"""Abstract repository for InventoryItem aggregate.

Repositories are plain persistence. Serializing concurrent
read-modify-write on a row is the job of ``InventoryStore``, which is
the only writer. A repository whose backing store is shared with other
processes exposes that through ``lock()``; the store holds it around
every read-modify-write.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager, nullcontext

from orderproc.domain.model.inventory import InventoryItem


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_product_id(self, product_id: str) -> InventoryItem | None:
        """Return the inventory record for a product, or None."""

    @abstractmethod
    def list_all(self) -> list[InventoryItem]:
        """Return every inventory record."""

    @abstractmethod
    def save(self, item: InventoryItem) -> None:
        """Persist a new or updated inventory record."""

    def lock(self) -> AbstractContextManager:
        """Exclusive, reentrant hold on the whole store.

        The default does nothing, which is enough when only threads of
        one process share the store.
        """
        return nullcontext()
