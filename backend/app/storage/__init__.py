from __future__ import annotations
import logging

from app.core.errors import BackendFailure
from app.storage.base import StorageBackend, LOGIN_REQUESTS, LOGIN_ATTEMPTS
from app.storage.memory import MemoryBackend
from app.storage.sql import SqlBackend

logger = logging.getLogger(__name__)


def select_backend(database_url: str | None) -> StorageBackend:
    """
    Pick the store once, at startup.

    No URL means ephemeral storage; a URL whose database cannot be reached
    also falls back to ephemeral storage, with a warning.
    """
    if not database_url:
        logger.warning("DATABASE_URL not set; using in-memory storage (data is lost on restart)")
        return MemoryBackend()
    try:
        backend = SqlBackend(database_url)
    except BackendFailure as e:
        logger.warning("Database connection failed, using in-memory storage: %s", e.__cause__ or e)
        return MemoryBackend()
    logger.info("Using durable storage: %s", backend.engine.url.render_as_string(hide_password=True))
    return backend


__all__ = [
    "StorageBackend", "MemoryBackend", "SqlBackend", "select_backend",
    "LOGIN_REQUESTS", "LOGIN_ATTEMPTS",
]
