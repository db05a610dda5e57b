"""JSON-file-backed implementation of OrderRepository.

Each order is stored as one record with its items embedded, so an order
and its items are always written together.

Writes hold an interprocess lock (``<file>.lock``) and replace the file
atomically.
"""

from __future__ import annotations

import json
import os
import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from filelock import FileLock

from orderproc.domain.model.order import Order, OrderItem, OrderStatus
from orderproc.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = FileLock(f"{file_path}.lock")
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return str(uuid.uuid4())

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_page(self, offset: int, limit: int) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._load_raw()]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders[offset:offset + limit]

    def save(self, order: Order) -> None:
        if order.id is None:
            raise ValueError("Cannot save an order that has not been placed")

        with self._file_lock:
            orders = self._load_raw()
            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                orders.append(self._to_raw(order))
            self._persist_raw(orders)

    def lock(self) -> FileLock:
        return self._file_lock

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "status": order.status.value,
            "reservation_held": order.reservation_held,
            "total_amount": str(order.total_amount),
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "unit_price": str(item.unit_price),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                product_id=i["product_id"],
                quantity=i["quantity"],
                unit_price=Decimal(i["unit_price"]),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            items=items,
            total_amount=Decimal(raw["total_amount"]),
            status=OrderStatus(raw["status"]),
            reservation_held=raw.get("reservation_held", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp_path.write_text(json.dumps(orders, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    def _ensure_file(self) -> None:
        with self._file_lock:
            if not self._file_path.exists():
                self._persist_raw([])
