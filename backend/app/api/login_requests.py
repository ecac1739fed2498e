from typing import List

from fastapi import APIRouter, Depends, Request

from app.core.errors import NotFound
from app.schemas.login import LoginAttempt, LoginRequest, LoginRequestCreate, LoginStats
from app.services.lifecycle import LifecycleEngine
from app.storage.base import LOGIN_REQUESTS

router = APIRouter()


def get_lifecycle(request: Request) -> LifecycleEngine:
    return request.app.state.lifecycle


def _parse_id(request_id: str) -> int:
    # the browser may send anything here; non-numeric ids simply do not exist
    try:
        return int(request_id)
    except ValueError:
        raise NotFound(LOGIN_REQUESTS, request_id)


@router.post("/api/login-requests", response_model=LoginRequest)
def create_login_request(body: LoginRequestCreate, engine: LifecycleEngine = Depends(get_lifecycle)):
    return engine.submit(body.username, body.password, body.ip_address)


# declared before /{request_id} so "pending" is not read as an id
@router.get("/api/login-requests/pending", response_model=List[LoginRequest])
def list_pending(engine: LifecycleEngine = Depends(get_lifecycle)):
    return engine.list_pending()


@router.get("/api/login-requests", response_model=List[LoginRequest])
def list_login_requests(engine: LifecycleEngine = Depends(get_lifecycle)):
    return engine.list_all()


@router.get("/api/login-requests/{request_id}", response_model=LoginRequest)
def get_login_request(request_id: str, engine: LifecycleEngine = Depends(get_lifecycle)):
    return engine.get_by_id(_parse_id(request_id))


@router.put("/api/login-requests/{request_id}/approve", response_model=LoginRequest)
def approve_login_request(request_id: str, engine: LifecycleEngine = Depends(get_lifecycle)):
    return engine.approve(_parse_id(request_id))


@router.put("/api/login-requests/{request_id}/reject", response_model=LoginRequest)
def reject_login_request(request_id: str, engine: LifecycleEngine = Depends(get_lifecycle)):
    return engine.reject(_parse_id(request_id))


@router.get("/api/statistics", response_model=LoginStats)
def statistics(engine: LifecycleEngine = Depends(get_lifecycle)):
    return engine.stats()


@router.get("/api/login-attempts", response_model=List[LoginAttempt])
def list_login_attempts(engine: LifecycleEngine = Depends(get_lifecycle)):
    return engine.list_attempts()
