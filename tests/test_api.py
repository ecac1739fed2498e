from fastapi.testclient import TestClient

from backend.main import app
from app.api.login_requests import get_lifecycle
from app.core.database import Base
from app.core.errors import BackendFailure
from app.services.lifecycle import LifecycleEngine
from app.storage import MemoryBackend


def test_submit_and_approve_scenario(client):
    r = client.post("/api/login-requests",
                    json={"username": "alice", "password": "pw1", "ipAddress": "10.0.0.1"})
    assert r.status_code == 200
    created = r.json()
    assert created["status"] == "pending"
    assert created["ip_address"] == "10.0.0.1"

    r = client.put(f"/api/login-requests/{created['id']}/approve")
    assert r.status_code == 200
    assert r.json()["status"] == "approved"

    pending = client.get("/api/login-requests/pending").json()
    assert created["id"] not in [p["id"] for p in pending]

    attempts = client.get("/api/login-attempts").json()
    assert any(a["username"] == "alice" and a["status"] == "approved" for a in attempts)


def test_submit_without_ip_defaults_to_loopback(client):
    r = client.post("/api/login-requests", json={"username": "bob", "password": "pw"})
    assert r.status_code == 200
    assert r.json()["ip_address"] == "127.0.0.1"


def test_reject(client):
    rid = client.post("/api/login-requests", json={"username": "c", "password": "pw"}).json()["id"]
    r = client.put(f"/api/login-requests/{rid}/reject")
    assert r.status_code == 200
    assert r.json()["status"] == "rejected"
    assert client.get(f"/api/login-requests/{rid}").json()["status"] == "rejected"


def test_list_all_and_get_by_id(client):
    ids = [client.post("/api/login-requests", json={"username": f"u{i}", "password": "pw"}).json()["id"]
           for i in range(2)]
    rows = client.get("/api/login-requests").json()
    assert [r["id"] for r in rows] == list(reversed(ids))
    r = client.get(f"/api/login-requests/{ids[0]}")
    assert r.status_code == 200
    assert r.json()["username"] == "u0"


def test_missing_ids_are_404(client):
    for method, path in [
        ("get", "/api/login-requests/9999"),
        ("put", "/api/login-requests/9999/approve"),
        ("put", "/api/login-requests/9999/reject"),
        ("get", "/api/login-requests/not-a-number"),
    ]:
        r = getattr(client, method)(path)
        assert r.status_code == 404, path
        assert r.json() == {"error": "Login request not found"}


def test_statistics(client):
    ids = [client.post("/api/login-requests", json={"username": f"u{i}", "password": "pw"}).json()["id"]
           for i in range(3)]
    client.put(f"/api/login-requests/{ids[0]}/approve")
    client.put(f"/api/login-requests/{ids[1]}/reject")
    r = client.get("/api/statistics")
    assert r.status_code == 200
    assert r.json() == {"total": 3, "approved": 1, "rejected": 1, "pending": 1, "today": 3}


def test_strict_mode_returns_409():
    engine = LifecycleEngine(MemoryBackend(), strict_transitions=True)
    app.dependency_overrides[get_lifecycle] = lambda: engine
    try:
        client = TestClient(app)
        rid = client.post("/api/login-requests", json={"username": "x", "password": "pw"}).json()["id"]
        assert client.put(f"/api/login-requests/{rid}/approve").status_code == 200
        r = client.put(f"/api/login-requests/{rid}/reject")
        assert r.status_code == 409
        assert r.json() == {"error": "Login request already resolved"}
    finally:
        app.dependency_overrides.clear()


class _BrokenBackend(MemoryBackend):
    def list(self, collection, **filters):
        raise BackendFailure("connection lost")

    def create(self, collection, values):
        raise BackendFailure("connection lost")


def test_backend_failure_is_generic_500():
    engine = LifecycleEngine(_BrokenBackend())
    app.dependency_overrides[get_lifecycle] = lambda: engine
    try:
        client = TestClient(app)
        for method, path, kw in [
            ("get", "/api/login-requests", {}),
            ("get", "/api/login-requests/pending", {}),
            ("get", "/api/statistics", {}),
            ("post", "/api/login-requests", {"json": {"username": "a", "password": "b"}}),
        ]:
            r = getattr(client, method)(path, **kw)
            assert r.status_code == 500, path
            assert r.json() == {"error": "Internal server error"}
            assert "connection lost" not in r.text
    finally:
        app.dependency_overrides.clear()


def test_health_reports_unhealthy_backend():
    engine = LifecycleEngine(_BrokenBackend())
    app.dependency_overrides[get_lifecycle] = lambda: engine
    try:
        r = TestClient(app).get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "unhealthy"
    finally:
        app.dependency_overrides.clear()


def test_ids_too_large_for_the_column_are_404(client):
    client.post("/api/login-requests", json={"username": "a", "password": "pw"})
    for method, path in [
        ("get", "/api/login-requests/9223372036854775808"),
        ("put", "/api/login-requests/9223372036854775808/approve"),
        ("put", "/api/login-requests/99999999999999999999999/reject"),
    ]:
        r = getattr(client, method)(path)
        assert r.status_code == 404, path
        assert r.json() == {"error": "Login request not found"}


def test_lost_database_gives_generic_500(sql_backend):
    engine = LifecycleEngine(sql_backend)
    rid = engine.submit("a", "pw").id
    Base.metadata.drop_all(bind=sql_backend.engine)
    app.dependency_overrides[get_lifecycle] = lambda: engine
    try:
        client = TestClient(app)
        for method, path, kw in [
            ("get", "/api/login-requests", {}),
            ("get", f"/api/login-requests/{rid}", {}),
            ("put", f"/api/login-requests/{rid}/approve", {}),
            ("get", "/api/statistics", {}),
            ("post", "/api/login-requests", {"json": {"username": "b", "password": "pw"}}),
        ]:
            r = getattr(client, method)(path, **kw)
            assert r.status_code == 500, path
            assert r.json() == {"error": "Internal server error"}
    finally:
        app.dependency_overrides.clear()


def test_malformed_submission_is_stored_as_is(client):
    r = client.post("/api/login-requests", json={})
    assert r.status_code == 200
    body = r.json()
    assert body["username"] is None
    assert body["password"] is None
    assert body["ip_address"] == "127.0.0.1"
    assert body["status"] == "pending"

    r = client.post("/api/login-requests", json={"username": 42, "password": True, "ipAddress": "10.0.0.2"})
    assert r.status_code == 200
    stored = client.get(f"/api/login-requests/{r.json()['id']}").json()
    assert stored["username"] == "42"
    assert stored["password"] == "true"
    assert stored["ip_address"] == "10.0.0.2"
