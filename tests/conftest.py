import pytest
from fastapi.testclient import TestClient

import backend  # noqa: F401  puts backend/ on sys.path for "app.*" imports
from backend.main import app
from app.api.login_requests import get_lifecycle
from app.services.lifecycle import LifecycleEngine
from app.storage import MemoryBackend, SqlBackend


@pytest.fixture()
def memory_backend():
    return MemoryBackend()


@pytest.fixture()
def sql_backend(tmp_path):
    b = SqlBackend(f"sqlite:///{tmp_path / 'login.db'}")
    try:
        yield b
    finally:
        b.close()


@pytest.fixture(params=["memory", "sql"])
def backend(request, tmp_path):
    if request.param == "memory":
        yield MemoryBackend()
        return
    b = SqlBackend(f"sqlite:///{tmp_path / 'login.db'}")
    try:
        yield b
    finally:
        b.close()


@pytest.fixture()
def engine(backend):
    return LifecycleEngine(backend)


@pytest.fixture()
def client(engine):
    app.dependency_overrides[get_lifecycle] = lambda: engine
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
