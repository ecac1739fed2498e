from __future__ import annotations
import logging
from typing import List, Optional

from app.schemas.login import LoginAttempt
from app.storage.base import LOGIN_ATTEMPTS, StorageBackend
from app.utils.audit_sink import write_event

logger = logging.getLogger(__name__)


class LoginAttemptLog:
    """Append-only record of resolutions. Rows are never updated."""

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    def append(self, username: Optional[str], ip_address: Optional[str], status: str) -> LoginAttempt:
        row = self.backend.create(LOGIN_ATTEMPTS, {
            "username": username,
            "ip_address": ip_address,
            "status": status,
        })
        attempt = LoginAttempt.model_validate(row)
        try:
            write_event(attempt.model_dump(mode="json"))
        except OSError:
            # the stored row is the record; the file copy is best effort
            logger.exception("could not mirror login attempt %s to the attempt log dir", attempt.id)
        return attempt

    def list_all(self) -> List[LoginAttempt]:
        return [LoginAttempt.model_validate(r) for r in self.backend.list(LOGIN_ATTEMPTS)]

    def list_for_username(self, username: str) -> List[LoginAttempt]:
        rows = self.backend.list(LOGIN_ATTEMPTS, username=username)
        return [LoginAttempt.model_validate(r) for r in rows]
