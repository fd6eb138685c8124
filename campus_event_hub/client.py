"""Campus Event Hub API client.

A thin wrapper around the REST API using the ``requests`` library.
It is what dashboards, scripts and bots use to talk to the backend:

* :meth:`EventHubClient.sign_up` / :meth:`EventHubClient.login` obtain
  a bearer token and keep it for subsequent calls.
* Event operations: list, get, create, update, delete.
* Registration operations: register, unregister, list mine, list by
  event, list by user.

Every operation returns a tuple ``(data, error)``.  On success
``error`` is ``None``; on failure ``data`` is ``None`` (or an empty
list for listings) and ``error`` is a dictionary with the keys
``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

Error = Dict[str, Any]
Result = Tuple[Optional[Any], Optional[Error]]


class EventHubClient:
    """Client for the Campus Event Hub REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        api_prefix: str = "/api/v1",
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3001``.
            token: Optional bearer token sent in the ``Authorization``
                header of every request.
            session: Optional requests session.  If not supplied a
                session is created automatically.
            api_prefix: Path prefix of the versioned API.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout
        self.user: Optional[Dict[str, Any]] = None

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the API prefix (e.g. ``/events``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("error") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path)
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def _store_session(self, data: Optional[Dict[str, Any]]) -> None:
        if data:
            self.token = data.get("accessToken")
            self.user = data.get("user")

    def sign_up(self, name: str, email: str, password: str, role: str = "student") -> Result:
        """Create an account and remember its token."""
        data, error = self._request(
            "POST",
            "/auth/register",
            json_body={"name": name, "email": email, "password": password, "role": role},
        )
        if not error:
            self._store_session(data)
        return data, error

    def login(self, email: str, password: str) -> Result:
        """Log in and remember the returned token."""
        data, error = self._request("POST", "/auth/login", json_body={"email": email, "password": password})
        if not error:
            self._store_session(data)
        return data, error

    def logout(self) -> None:
        self.token = None
        self.user = None

    def me(self) -> Result:
        return self._request("GET", "/auth/me")

    # ------------------------------------------------------------------
    # Event operations
    # ------------------------------------------------------------------
    def list_events(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/events")

    def get_event(self, event_id: str) -> Result:
        return self._request("GET", f"/events/{event_id}")

    def create_event(self, title: str, description: str, date: str, venue: str) -> Result:
        payload = {"title": title, "description": description, "date": date, "venue": venue}
        return self._request("POST", "/events", json_body=payload)

    def update_event(self, event_id: str, **fields: str) -> Result:
        """Update an event; only the keyword arguments given are sent."""
        return self._request("PUT", f"/events/{event_id}", json_body=fields)

    def delete_event(self, event_id: str) -> Result:
        return self._request("DELETE", f"/events/{event_id}")

    # ------------------------------------------------------------------
    # Registration operations
    # ------------------------------------------------------------------
    def register_for_event(self, event_id: str) -> Result:
        return self._request("POST", "/registrations", json_body={"eventId": event_id})

    def cancel_registration(self, registration_id: str) -> Result:
        return self._request("DELETE", f"/registrations/{registration_id}")

    def my_registrations(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/registrations/my")

    def event_registrations(self, event_id: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list(f"/registrations/event/{event_id}")

    def user_registrations(self, user_id: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list(f"/registrations/user/{user_id}")

    # ------------------------------------------------------------------
    # Service endpoints
    # ------------------------------------------------------------------
    def health(self) -> Result:
        return self._request("GET", "/health")

    def activity(self) -> Result:
        return self._request("GET", "/activity")
