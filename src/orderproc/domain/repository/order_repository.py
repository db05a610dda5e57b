"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager, nullcontext

from orderproc.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_page(self, offset: int, limit: int) -> list[Order]:
        """Return up to *limit* orders, newest created first, skipping *offset*."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order together with its items."""

    def lock(self) -> AbstractContextManager:
        """Exclusive, reentrant hold for a load-change-save of an order."""
        return nullcontext()
