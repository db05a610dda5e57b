"""JSON-file-backed implementation of PaymentRepository."""

from __future__ import annotations

import json
import os
import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from filelock import FileLock

from orderproc.domain.model.payment import PaymentStatus, PaymentTransaction
from orderproc.domain.repository.payment_repository import PaymentRepository


class JsonPaymentRepository(PaymentRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = FileLock(f"{file_path}.lock")
        self._ensure_file()

    def next_id(self) -> str:
        return str(uuid.uuid4())

    def get_by_id(self, transaction_id: str) -> PaymentTransaction | None:
        for raw in self._load_raw():
            if raw["transaction_id"] == transaction_id:
                return self._to_domain(raw)
        return None

    def add(self, transaction: PaymentTransaction) -> None:
        with self._file_lock:
            records = self._load_raw()
            records.append(self._to_raw(transaction))
            self._persist_raw(records)

    @staticmethod
    def _to_raw(transaction: PaymentTransaction) -> dict:
        return {
            "transaction_id": transaction.transaction_id,
            "order_id": transaction.order_id,
            "amount": str(transaction.amount),
            "method": transaction.method,
            "status": transaction.status.value,
            "processed_at": transaction.processed_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> PaymentTransaction:
        return PaymentTransaction(
            transaction_id=raw["transaction_id"],
            order_id=raw["order_id"],
            amount=Decimal(raw["amount"]),
            method=raw.get("method", ""),
            status=PaymentStatus(raw["status"]),
            processed_at=datetime.fromisoformat(raw["processed_at"]),
        )

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    def _ensure_file(self) -> None:
        with self._file_lock:
            if not self._file_path.exists():
                self._persist_raw([])
