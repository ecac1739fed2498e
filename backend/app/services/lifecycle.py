from __future__ import annotations
import logging
from typing import List, Optional

from app.core.errors import InvalidTransition
from app.crud.login_attempt import LoginAttemptLog
from app.crud.login_request import LoginRequestStore
from app.metrics import login_requests_resolved_total, login_requests_submitted_total
from app.models.login_request import RequestStatus
from app.schemas.login import LoginAttempt, LoginRequest, LoginStats
from app.storage.base import StorageBackend
from app.utils.stats import compute_stats

logger = logging.getLogger(__name__)

VALID_OUTCOMES = {RequestStatus.APPROVED.value, RequestStatus.REJECTED.value}


class LifecycleEngine:
    """
    Drives a login request from pending to approved/rejected.

    Resolution is two writes: the request row is updated, then one attempt
    row is appended. They are not wrapped in a transaction, so a crash in
    between leaves a resolved request without its attempt record.
    """

    def __init__(self, backend: StorageBackend, strict_transitions: bool = False):
        self.backend = backend
        self.requests = LoginRequestStore(backend)
        self.attempts = LoginAttemptLog(backend)
        self.strict_transitions = strict_transitions

    def submit(self, username: Optional[str], password: Optional[str], ip_address: Optional[str] = None) -> LoginRequest:
        req = self.requests.submit(username, password, ip_address)
        login_requests_submitted_total.inc()
        logger.info("login request %s submitted for %r from %s", req.id, req.username, req.ip_address)
        return req

    def list_all(self) -> List[LoginRequest]:
        return self.requests.list_all()

    def list_pending(self) -> List[LoginRequest]:
        return self.requests.list_pending()

    def get_by_id(self, request_id: int) -> LoginRequest:
        return self.requests.get_by_id(request_id)

    def resolve(self, request_id: int, outcome: str) -> LoginRequest:
        """Set the terminal status, append the attempt, return the updated request."""
        o = (outcome.value if isinstance(outcome, RequestStatus) else str(outcome or "")).strip().lower()
        if o not in VALID_OUTCOMES:
            raise ValueError(f"Invalid outcome '{outcome}'. Must be one of {sorted(VALID_OUTCOMES)}.")

        current = self.requests.get_by_id(request_id)
        if current.status != RequestStatus.PENDING.value:
            if self.strict_transitions:
                raise InvalidTransition(request_id, current.status, o)
            logger.warning("login request %s re-resolved: %s -> %s", request_id, current.status, o)

        updated = self.requests.set_status(request_id, RequestStatus(o))
        self.attempts.append(updated.username, updated.ip_address, o)

        login_requests_resolved_total.labels(outcome=o).inc()
        logger.info("login request %s %s", request_id, o)
        return updated

    def approve(self, request_id: int) -> LoginRequest:
        return self.resolve(request_id, RequestStatus.APPROVED)

    def reject(self, request_id: int) -> LoginRequest:
        return self.resolve(request_id, RequestStatus.REJECTED)

    def list_attempts(self) -> List[LoginAttempt]:
        return self.attempts.list_all()

    def stats(self) -> LoginStats:
        return compute_stats(self.requests)
