from __future__ import annotations
import logging
from typing import Any, List

from sqlalchemy import inspect, text
from sqlalchemy.exc import DataError, SQLAlchemyError

from app.core.database import Base, make_engine, make_session_factory
from app.core.errors import BackendFailure, NotFound
from app.models import LoginAttempt, LoginRequest
from app.storage.base import (
    LOGIN_ATTEMPTS, LOGIN_REQUESTS, Record, StorageBackend, check_collection, check_filters,
)

logger = logging.getLogger(__name__)

_TABLES = {
    LOGIN_REQUESTS: LoginRequest,
    LOGIN_ATTEMPTS: LoginAttempt,
}

# widest integer primary key any supported database stores
_MIN_ID, _MAX_ID = -(2 ** 63), 2 ** 63 - 1


def _as_dict(row) -> Record:
    return {c.key: getattr(row, c.key) for c in inspect(row).mapper.column_attrs}


def _get_row(db, collection: str, record_id: int):
    # an id the column cannot hold (driver overflow, DataError on Postgres) cannot exist
    if not _MIN_ID <= record_id <= _MAX_ID:
        raise NotFound(collection, record_id)
    try:
        row = db.get(_TABLES[collection], record_id)
    except (OverflowError, DataError):
        raise NotFound(collection, record_id)
    if row is None:
        raise NotFound(collection, record_id)
    return row


class SqlBackend(StorageBackend):
    """
    Durable store on a relational database via SQLAlchemy.

    Construction creates the tables and pings the database, so an
    unreachable server fails here (as BackendFailure) and not on the
    first request. Each operation runs in its own session and commit.
    """

    kind = "sql"

    def __init__(self, url: str) -> None:
        super().__init__()
        try:
            self.engine = make_engine(url)
            Base.metadata.create_all(bind=self.engine)
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise BackendFailure(f"database unavailable: {e}") from e
        self.SessionLocal = make_session_factory(self.engine)
        logger.info("Database initialized (%s); tables: %s",
                    self.engine.name, inspect(self.engine).get_table_names())

    def create(self, collection: str, values: Record) -> Record:
        check_collection(collection)
        model = _TABLES[collection]
        try:
            with self.SessionLocal() as db:
                row = model(**self._stamp_new(collection, values))
                db.add(row)
                db.commit()
                db.refresh(row)
                return _as_dict(row)
        except SQLAlchemyError as e:
            raise BackendFailure(f"insert into {collection} failed") from e

    def list(self, collection: str, **filters: Any) -> List[Record]:
        check_collection(collection)
        check_filters(collection, filters)
        model = _TABLES[collection]
        try:
            with self.SessionLocal() as db:
                q = db.query(model)
                for key, value in filters.items():
                    q = q.filter(getattr(model, key) == value)
                rows = q.order_by(model.created_at.desc(), model.id.desc()).all()
                return [_as_dict(r) for r in rows]
        except SQLAlchemyError as e:
            raise BackendFailure(f"select from {collection} failed") from e

    def get(self, collection: str, record_id: int) -> Record:
        check_collection(collection)
        try:
            with self.SessionLocal() as db:
                row = _get_row(db, collection, record_id)
                return _as_dict(row)
        except SQLAlchemyError as e:
            raise BackendFailure(f"select from {collection} failed") from e

    def update(self, collection: str, record_id: int, values: Record) -> Record:
        check_collection(collection)
        try:
            with self.SessionLocal() as db:
                row = _get_row(db, collection, record_id)
                for key, value in self._stamp_update(collection, values).items():
                    if key != "id":
                        setattr(row, key, value)
                db.commit()
                db.refresh(row)
                return _as_dict(row)
        except SQLAlchemyError as e:
            raise BackendFailure(f"update of {collection} {record_id} failed") from e

    def close(self) -> None:
        self.engine.dispose()
