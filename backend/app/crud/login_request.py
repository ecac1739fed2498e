from typing import List, Optional

from app.models.login_request import RequestStatus
from app.schemas.login import LoginRequest
from app.storage.base import LOGIN_REQUESTS, StorageBackend

DEFAULT_IP = "127.0.0.1"


class LoginRequestStore:
    def __init__(self, backend: StorageBackend):
        self.backend = backend

    def submit(self, username: Optional[str], password: Optional[str], ip_address: Optional[str] = None) -> LoginRequest:
        row = self.backend.create(LOGIN_REQUESTS, {
            "username": username,
            "password": password,
            "ip_address": ip_address or DEFAULT_IP,
            "status": RequestStatus.PENDING.value,
        })
        return LoginRequest.model_validate(row)

    def list_all(self) -> List[LoginRequest]:
        return [LoginRequest.model_validate(r) for r in self.backend.list(LOGIN_REQUESTS)]

    def list_by_status(self, status: RequestStatus) -> List[LoginRequest]:
        rows = self.backend.list(LOGIN_REQUESTS, status=RequestStatus(status).value)
        return [LoginRequest.model_validate(r) for r in rows]

    def list_pending(self) -> List[LoginRequest]:
        return self.list_by_status(RequestStatus.PENDING)

    def get_by_id(self, request_id: int) -> LoginRequest:
        return LoginRequest.model_validate(self.backend.get(LOGIN_REQUESTS, request_id))

    def set_status(self, request_id: int, status: RequestStatus) -> LoginRequest:
        row = self.backend.update(LOGIN_REQUESTS, request_id, {"status": RequestStatus(status).value})
        return LoginRequest.model_validate(row)
