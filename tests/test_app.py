# tests/test_app.py

from fastapi.testclient import TestClient

from campus_event_hub.app.core.config import settings
from campus_event_hub.app.main import app


def test_root_lists_endpoints(test_client: TestClient):
    response = test_client.get("/")

    assert response.status_code == 200
    assert response.json()["endpoints"]["events"] == "/api/v1/events"


def test_health(test_client: TestClient):
    response = test_client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_unknown_route_returns_404(test_client: TestClient):
    response = test_client.get("/api/v1/nowhere")

    assert response.status_code == 404
    assert "detail" in response.json()


def test_malformed_body_returns_400(test_client: TestClient, admin_headers):
    response = test_client.post(
        "/api/v1/events",
        content="not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400


def test_store_failure_returns_generic_500(test_client: TestClient, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "missing" / "db.sqlite"))

    response = test_client.get("/api/v1/events")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_unexpected_error_returns_generic_500(monkeypatch):
    from campus_event_hub.app.services.event_service import EventService

    async def boom(cls):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(EventService, "list_events", classmethod(boom))

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/v1/events")

    assert response.status_code == 500
    assert "secret internals" not in response.text


def test_requests_are_recorded_in_activity_log(test_client: TestClient):
    test_client.get("/api/v1/events", headers={"User-Agent": "pytest-agent"})
    test_client.get("/api/v1/events/missing")

    body = test_client.get("/api/v1/activity").json()

    assert body["total"] == 2
    newest, oldest = body["logs"]
    assert newest["path"] == "/api/v1/events/missing"
    assert newest["status"] == 404
    assert oldest["method"] == "GET"
    assert oldest["userAgent"] == "pytest-agent"
    assert oldest["duration"].endswith("ms")
