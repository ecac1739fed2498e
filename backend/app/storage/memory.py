from __future__ import annotations
import copy
from threading import RLock
from typing import Any, Dict, List

from app.core.errors import NotFound
from app.storage.base import COLLECTIONS, Record, StorageBackend, check_collection, check_filters


class MemoryBackend(StorageBackend):
    """Process-local fallback store. Ids start at 1 per collection, per instance."""

    kind = "memory"

    def __init__(self) -> None:
        super().__init__()
        self._lock = RLock()
        self._rows: Dict[str, List[Record]] = {c: [] for c in COLLECTIONS}
        self._next_id: Dict[str, int] = {c: 1 for c in COLLECTIONS}

    def _find(self, collection: str, record_id: int) -> Record:
        for row in self._rows[collection]:
            if row["id"] == record_id:
                return row
        raise NotFound(collection, record_id)

    def create(self, collection: str, values: Record) -> Record:
        check_collection(collection)
        with self._lock:
            row = self._stamp_new(collection, values)
            row["id"] = self._next_id[collection]
            self._next_id[collection] += 1
            self._rows[collection].append(row)
            return copy.deepcopy(row)

    def list(self, collection: str, **filters: Any) -> List[Record]:
        check_collection(collection)
        check_filters(collection, filters)
        with self._lock:
            rows = [
                r for r in self._rows[collection]
                if all(r.get(k) == v for k, v in filters.items())
            ]
            rows.sort(key=lambda r: (r["created_at"], r["id"]), reverse=True)
            return copy.deepcopy(rows)

    def get(self, collection: str, record_id: int) -> Record:
        check_collection(collection)
        with self._lock:
            return copy.deepcopy(self._find(collection, record_id))

    def update(self, collection: str, record_id: int, values: Record) -> Record:
        check_collection(collection)
        with self._lock:
            row = self._find(collection, record_id)
            changes = self._stamp_update(collection, values)
            changes.pop("id", None)
            row.update(changes)
            return copy.deepcopy(row)
