"""PaymentTransaction — the immutable record of one payment attempt."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class PaymentStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"


@dataclass(frozen=True)
class PaymentTransaction:
    transaction_id: str
    order_id: str
    amount: Decimal
    method: str
    status: PaymentStatus
    processed_at: datetime

    @property
    def is_success(self) -> bool:
        return self.status == PaymentStatus.COMPLETED
