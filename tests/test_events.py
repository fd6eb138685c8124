# tests/test_events.py

import sys

import pytest
from fastapi.testclient import TestClient

from campus_event_hub.app.core.config import settings
from tests.conftest import ADMIN_ID, ORIENTATION


def test_create_event_returns_stored_record(test_client: TestClient, admin_headers):
    response = test_client.post("/api/v1/events", json=ORIENTATION, headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["eventId"]
    assert body["createdBy"] == ADMIN_ID
    assert body["createdAt"]
    for field, value in ORIENTATION.items():
        assert body[field] == value


def test_get_event_round_trip(test_client: TestClient, event):
    response = test_client.get(f"/api/v1/events/{event['eventId']}")

    assert response.status_code == 200
    assert response.json() == event


def test_create_event_requires_authentication(test_client: TestClient):
    response = test_client.post("/api/v1/events", json=ORIENTATION)

    assert response.status_code == 401
    assert test_client.get("/api/v1/events").json() == []


def test_create_event_rejects_invalid_token(test_client: TestClient):
    response = test_client.post(
        "/api/v1/events", json=ORIENTATION, headers={"Authorization": "Bearer not.a.token"}
    )

    assert response.status_code == 401


@pytest.mark.parametrize("field", ["title", "description", "date", "venue"])
@pytest.mark.parametrize("value", [None, ""])
def test_create_event_with_missing_field_fails(test_client: TestClient, admin_headers, field, value):
    payload = dict(ORIENTATION)
    if value is None:
        del payload[field]
    else:
        payload[field] = value

    response = test_client.post("/api/v1/events", json=payload, headers=admin_headers)

    assert response.status_code == 400
    assert field in response.json()["detail"]
    assert test_client.get("/api/v1/events").json() == []


def test_create_event_names_all_missing_fields(test_client: TestClient, admin_headers):
    response = test_client.post("/api/v1/events", json={"title": "Orientation"}, headers=admin_headers)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert "description" in detail and "date" in detail and "venue" in detail


def test_create_event_rejects_non_iso_date(test_client: TestClient, admin_headers):
    payload = {**ORIENTATION, "date": "next tuesday"}

    response = test_client.post("/api/v1/events", json=payload, headers=admin_headers)

    assert response.status_code == 400


def test_list_events_is_public_and_ordered_by_date(test_client: TestClient, admin_headers):
    for title, date in [("Late", "2025-12-01"), ("Early", "2025-01-15"), ("Middle", "2025-06-30")]:
        test_client.post("/api/v1/events", json={**ORIENTATION, "title": title, "date": date}, headers=admin_headers)

    response = test_client.get("/api/v1/events")

    assert response.status_code == 200
    assert [e["title"] for e in response.json()] == ["Early", "Middle", "Late"]


@pytest.mark.parametrize(
    "later, earlier",
    [
        ("2025-09-01 11:00", "2025-09-01T09:00"),
        ("2025-09-01T23:00:00-05:00", "2025-09-02T01:00:00Z"),
    ],
)
def test_list_events_orders_mixed_date_forms_chronologically(test_client: TestClient, admin_headers, later, earlier):
    for title, date in [("Later", later), ("Earlier", earlier)]:
        created = test_client.post(
            "/api/v1/events", json={**ORIENTATION, "title": title, "date": date}, headers=admin_headers
        )
        assert created.status_code == 201

    response = test_client.get("/api/v1/events")

    assert [e["title"] for e in response.json()] == ["Earlier", "Later"]


@pytest.mark.skipif(sys.version_info < (3, 11), reason="basic format dates need Python 3.11")
def test_list_events_orders_basic_format_dates(test_client: TestClient, admin_headers):
    for title, date in [("Dec", "2025-12-01"), ("Jan", "20250101")]:
        test_client.post("/api/v1/events", json={**ORIENTATION, "title": title, "date": date}, headers=admin_headers)

    response = test_client.get("/api/v1/events")

    assert [(e["title"], e["date"]) for e in response.json()] == [("Jan", "2025-01-01"), ("Dec", "2025-12-01")]


def test_event_dates_are_stored_in_canonical_form(test_client: TestClient, event, admin_headers):
    response = test_client.put(
        f"/api/v1/events/{event['eventId']}", json={"date": "2025-09-01T10:30:00+02:00"}, headers=admin_headers
    )

    assert event["date"] == "2025-09-01"
    assert response.status_code == 200
    assert response.json()["date"] == "2025-09-01T08:30:00.000Z"


def test_list_events_ignores_invalid_optional_token(test_client: TestClient, event):
    response = test_client.get("/api/v1/events", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 200
    assert len(response.json()) == 1


def test_get_missing_event_returns_404(test_client: TestClient):
    response = test_client.get("/api/v1/events/does-not-exist")

    assert response.status_code == 404
    assert response.json()["detail"] == "Event not found"


def test_update_event_merges_partial_fields(test_client: TestClient, event, student_headers):
    response = test_client.put(
        f"/api/v1/events/{event['eventId']}", json={"venue": "Hall B"}, headers=student_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["venue"] == "Hall B"
    assert body["title"] == event["title"]
    assert body["description"] == event["description"]
    assert body["date"] == event["date"]
    assert body["createdBy"] == event["createdBy"]
    assert body["updatedAt"]
    assert test_client.get(f"/api/v1/events/{event['eventId']}").json() == body


def test_update_event_ignores_empty_values(test_client: TestClient, event, admin_headers):
    response = test_client.put(
        f"/api/v1/events/{event['eventId']}", json={"title": "", "venue": None}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["title"] == event["title"]
    assert response.json()["venue"] == event["venue"]


def test_update_missing_event_returns_404(test_client: TestClient, admin_headers):
    response = test_client.put("/api/v1/events/nope", json={"venue": "Hall B"}, headers=admin_headers)

    assert response.status_code == 404


def test_update_event_requires_authentication(test_client: TestClient, event):
    response = test_client.put(f"/api/v1/events/{event['eventId']}", json={"venue": "Hall B"})

    assert response.status_code == 401


def test_delete_then_get_returns_404(test_client: TestClient, event, admin_headers):
    response = test_client.delete(f"/api/v1/events/{event['eventId']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Event deleted successfully"}
    assert test_client.get(f"/api/v1/events/{event['eventId']}").status_code == 404


def test_delete_missing_event_returns_404(test_client: TestClient, admin_headers):
    response = test_client.delete("/api/v1/events/nope", headers=admin_headers)

    assert response.status_code == 404


def test_any_authenticated_user_may_mutate_events_by_default(test_client: TestClient, event, student_headers):
    response = test_client.delete(f"/api/v1/events/{event['eventId']}", headers=student_headers)

    assert response.status_code == 200


def test_admin_only_writes_when_enabled(test_client: TestClient, monkeypatch, admin_headers, student_headers):
    monkeypatch.setattr(settings, "event_writes_admin_only", True)

    denied = test_client.post("/api/v1/events", json=ORIENTATION, headers=student_headers)
    allowed = test_client.post("/api/v1/events", json=ORIENTATION, headers=admin_headers)

    assert denied.status_code == 403
    assert allowed.status_code == 201
