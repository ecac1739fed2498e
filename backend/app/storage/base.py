from __future__ import annotations
import abc
from datetime import datetime, timedelta
from threading import Lock
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]

LOGIN_REQUESTS = "login_requests"
LOGIN_ATTEMPTS = "login_attempts"
COLLECTIONS = (LOGIN_REQUESTS, LOGIN_ATTEMPTS)

# collections whose records carry an updated_at column
_UPDATABLE = {LOGIN_REQUESTS}

FIELDS = {
    LOGIN_REQUESTS: {"id", "username", "password", "ip_address", "status", "created_at", "updated_at"},
    LOGIN_ATTEMPTS: {"id", "username", "ip_address", "status", "created_at"},
}


class StorageBackend(abc.ABC):
    """
    Persistence contract shared by the durable and the ephemeral store.

    Records go in and come out as plain dicts. The backend assigns `id`,
    `created_at` and (for updatable collections) `updated_at`; `list`
    returns newest first.
    """

    kind: str = "abstract"

    def __init__(self) -> None:
        self._clock_lock = Lock()
        self._last_tick: Optional[datetime] = None

    def now(self) -> datetime:
        """Server-local wall clock that never repeats a value."""
        with self._clock_lock:
            t = datetime.now()
            if self._last_tick is not None and t <= self._last_tick:
                t = self._last_tick + timedelta(microseconds=1)
            self._last_tick = t
            return t

    def _stamp_new(self, collection: str, values: Record) -> Record:
        now = self.now()
        row = dict(values)
        row.setdefault("created_at", now)
        if collection in _UPDATABLE:
            row.setdefault("updated_at", row["created_at"])
        return row

    def _stamp_update(self, collection: str, values: Record) -> Record:
        row = dict(values)
        if collection in _UPDATABLE:
            row.setdefault("updated_at", self.now())
        return row

    @abc.abstractmethod
    def create(self, collection: str, values: Record) -> Record:
        ...

    @abc.abstractmethod
    def list(self, collection: str, **filters: Any) -> List[Record]:
        ...

    @abc.abstractmethod
    def get(self, collection: str, record_id: int) -> Record:
        """Return the record or raise NotFound."""

    @abc.abstractmethod
    def update(self, collection: str, record_id: int, values: Record) -> Record:
        """Apply `values` and return the updated record, or raise NotFound."""

    def close(self) -> None:
        pass


def check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection '{collection}'. Must be one of {sorted(COLLECTIONS)}.")


def check_filters(collection: str, filters: Dict[str, Any]) -> None:
    unknown = set(filters) - FIELDS[collection]
    if unknown:
        raise ValueError(f"Unknown field(s) {sorted(unknown)} for '{collection}'.")
