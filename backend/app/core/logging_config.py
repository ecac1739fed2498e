"""Logging setup shared by the API process and the tests."""
from __future__ import annotations

import logging

from app.core.config import LOG_LEVEL


def setup_logging() -> None:
    """Configure the root and uvicorn loggers once per process."""
    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)


__all__ = ["setup_logging"]
