# tests/test_client.py

from unittest.mock import MagicMock

import requests

from campus_event_hub.client import EventHubClient


def _response(status_code: int, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.content = b"x" if payload is not None else b""
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    return response


def _client(*responses):
    session = MagicMock()
    session.request.side_effect = list(responses)
    return EventHubClient(base_url="http://hub.test/", session=session), session


def test_login_stores_token_for_later_calls():
    client, session = _client(
        _response(200, {"accessToken": "tok", "tokenType": "bearer", "user": {"userId": "u1"}}),
        _response(200, []),
    )

    data, error = client.login("ada@example.edu", "analytical")
    client.my_registrations()

    assert error is None
    assert client.token == "tok"
    assert client.user == {"userId": "u1"}
    last_call = session.request.call_args_list[-1].kwargs
    assert last_call["url"] == "http://hub.test/api/v1/registrations/my"
    assert last_call["headers"] == {"Authorization": "Bearer tok"}


def test_register_for_event_sends_event_id():
    client, session = _client(_response(201, {"registrationId": "R1", "eventId": "E1"}))

    data, error = client.register_for_event("E1")

    assert error is None
    assert data["registrationId"] == "R1"
    call = session.request.call_args.kwargs
    assert call["method"] == "POST"
    assert call["json"] == {"eventId": "E1"}


def test_http_error_is_returned_with_status_and_detail():
    client, _ = _client(_response(409, {"detail": "Already registered for this event"}))

    data, error = client.register_for_event("E1")

    assert data is None
    assert error == {"status_code": 409, "message": "Already registered for this event"}


def test_network_failure_is_returned_as_error():
    session = MagicMock()
    session.request.side_effect = requests.ConnectionError("connection refused")
    client = EventHubClient(base_url="http://hub.test", session=session)

    events, error = client.list_events()

    assert events == []
    assert error["status_code"] is None
    assert "connection refused" in error["message"]


def test_update_event_sends_only_given_fields():
    client, session = _client(_response(200, {"eventId": "E1", "venue": "Hall B"}))

    client.update_event("E1", venue="Hall B")

    call = session.request.call_args.kwargs
    assert call["method"] == "PUT"
    assert call["url"] == "http://hub.test/api/v1/events/E1"
    assert call["json"] == {"venue": "Hall B"}


def test_logout_clears_credentials():
    client, _ = _client()
    client.token = "tok"

    client.logout()

    assert client.token is None
