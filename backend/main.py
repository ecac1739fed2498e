from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response, JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from datetime import datetime
from pathlib import Path
import logging, uvicorn

from app.core import config
from app.core.errors import BackendFailure, InvalidTransition, NotFound
from app.core.logging_config import setup_logging
from app.api.login_requests import router as login_requests_router, get_lifecycle
from app.metrics import init_metrics_zero
from app.services.lifecycle import LifecycleEngine
from app.storage import select_backend

setup_logging()
logger = logging.getLogger("login_approval")

app = FastAPI(
    title="Login Approval API",
    description="Records login attempts as pending requests for out-of-band approval",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

STATIC_DIR = Path(__file__).parent / "static"
if STATIC_DIR.is_dir():
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.on_event("startup")
def on_startup():
    # one backend per process: ids and rows are never shared between stores
    if getattr(app.state, "lifecycle", None) is None:
        backend = select_backend(config.DATABASE_URL)
        app.state.lifecycle = LifecycleEngine(backend, strict_transitions=config.STRICT_TRANSITIONS)
    init_metrics_zero()
    logger.info("Storage backend: %s; strict transitions: %s",
                app.state.lifecycle.backend.kind, app.state.lifecycle.strict_transitions)


@app.on_event("shutdown")
def on_shutdown():
    lifecycle = getattr(app.state, "lifecycle", None)
    if lifecycle is not None:
        lifecycle.backend.close()
        app.state.lifecycle = None


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"error": "Login request not found"})


@app.exception_handler(InvalidTransition)
async def invalid_transition_handler(request: Request, exc: InvalidTransition):
    return JSONResponse(status_code=409, content={"error": "Login request already resolved"})


@app.exception_handler(BackendFailure)
async def backend_failure_handler(request: Request, exc: BackendFailure):
    logger.error("Backend failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(login_requests_router, tags=["login-requests"])


@app.get("/health")
def health_check(engine: LifecycleEngine = Depends(get_lifecycle)):
    try:
        total = len(engine.list_all())
        return {
            "status": "healthy",
            "backend": engine.backend.kind,
            "login_requests": total,
            "timestamp": datetime.now(),
        }
    except BackendFailure as e:
        logger.error("Health check failed: %s", e)
        return {
            "status": "unhealthy",
            "backend": engine.backend.kind,
            "timestamp": datetime.now(),
        }


@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
