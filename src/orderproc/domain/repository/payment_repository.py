"""Abstract repository for PaymentTransaction records.

Transactions are append-only: there is no update path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderproc.domain.model.payment import PaymentTransaction


class PaymentRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique transaction ID."""

    @abstractmethod
    def get_by_id(self, transaction_id: str) -> PaymentTransaction | None:
        """Return a transaction by its ID, or None if not found."""

    @abstractmethod
    def add(self, transaction: PaymentTransaction) -> None:
        """Persist a new transaction."""
