"""JSON-file-backed implementation of InventoryRepository.

Several ``orderproc`` processes may share one file. Writes hold an
interprocess lock (``<file>.lock``) and replace the file atomically, so
a reader never sees a half-written file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from filelock import FileLock

from orderproc.domain.model.inventory import InventoryItem
from orderproc.domain.repository.inventory_repository import InventoryRepository


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = FileLock(f"{file_path}.lock")
        self._ensure_file()

    # --- InventoryRepository interface ----------------------------------------

    def get_by_product_id(self, product_id: str) -> InventoryItem | None:
        for raw in self._load_raw():
            if raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[InventoryItem]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, item: InventoryItem) -> None:
        with self._file_lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["product_id"] == item.product_id:
                    records[i] = self._to_raw(item)
                    break
            else:
                records.append(self._to_raw(item))
            self._persist_raw(records)

    def lock(self) -> FileLock:
        return self._file_lock

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: InventoryItem) -> dict:
        return {
            "product_id": item.product_id,
            "available_quantity": item.available_quantity,
            "reserved_quantity": item.reserved_quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryItem:
        return InventoryItem(
            product_id=raw["product_id"],
            available_quantity=raw["available_quantity"],
            reserved_quantity=raw.get("reserved_quantity", 0),
        )

    # --- File helpers ---------------------------------------------------------

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
