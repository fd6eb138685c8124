# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from campus_event_hub.app.core.config import settings
from campus_event_hub.app.core.db import init_db
from campus_event_hub.app.core.security import create_access_token
from campus_event_hub.app.main import app
from campus_event_hub.app.services.activity_service import activity_log

ADMIN_ID = "admin_1"
STUDENT_ID = "student_1"
OTHER_STUDENT_ID = "student_2"

ORIENTATION = {
    "title": "Orientation",
    "description": "Welcome session",
    "date": "2025-09-01",
    "venue": "Hall A",
}


def make_token(user_id: str, role: str = "student") -> str:
    return create_access_token({"sub": user_id, "role": role, "email": f"{user_id}@example.edu"})


def auth_headers(user_id: str, role: str = "student") -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, role)}"}


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the document store at a fresh SQLite file for every test."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    monkeypatch.setattr(settings, "event_writes_admin_only", False)
    init_db()
    activity_log.clear()
    yield


@pytest.fixture
def test_client():
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_headers():
    return auth_headers(ADMIN_ID, "admin")


@pytest.fixture
def student_headers():
    return auth_headers(STUDENT_ID)


@pytest.fixture
def other_student_headers():
    return auth_headers(OTHER_STUDENT_ID)


@pytest.fixture
def event(test_client, admin_headers):
    response = test_client.post("/api/v1/events", json=ORIENTATION, headers=admin_headers)
    assert response.status_code == 201
    return response.json()
