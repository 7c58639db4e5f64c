"""Lawn Care Booking API client.

A thin wrapper around the REST API used by the booking form and the
admin dashboard.  It uses the ``requests`` library and exposes one
method per endpoint:

* :meth:`create_booking` – submit the booking form.
* :meth:`get_booking` – fetch a booking for the confirmation page.
* :meth:`login` / :meth:`logout` – obtain and revoke an access token.
* :meth:`list_bookings`, :meth:`list_bookings_by_status`,
  :meth:`update_booking_status`, :meth:`dashboard_stats` – admin calls.

Every method returns a ``(data, error)`` tuple.  On success ``error``
is ``None``; on failure ``data`` is ``None`` and ``error`` is a
dictionary with ``status_code`` and ``message`` (plus ``errors`` for
validation failures).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class LawnCareAPI:
    """Client for the lawn-care booking API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``https://lawn.example.com``.
                The ``/api`` prefix is added by the client.
            token: Optional access token sent as ``Authorization: Bearer``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> Result:
        """Perform an HTTP request against ``/api{path}``."""
        url = f"{self.base_url}/api{path}"
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
            error: Dict[str, Any] = {"status_code": status, "message": str(exc)}
            if exc.response is not None:
                try:
                    body = exc.response.json()
                except ValueError:
                    body = None
                if isinstance(body, dict):
                    error["message"] = body.get("message") or body.get("detail") or error["message"]
                    if body.get("errors"):
                        error["errors"] = body["errors"]
                elif exc.response.text:
                    error["message"] = exc.response.text
            logger.error("API request failed (%s): %s", status, error["message"])
            return None, error
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Public booking operations
    # ------------------------------------------------------------------
    def create_booking(self, booking: Dict[str, Any]) -> Result:
        """Submit a booking.  ``booking`` uses the camelCase form keys."""
        return self._request("POST", "/bookings", json_body=booking)

    def get_booking(self, booking_id: int) -> Result:
        return self._request("GET", f"/bookings/{booking_id}")

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    def login(self, username: str, password: str) -> Result:
        """Log in and remember the returned token for later calls."""
        data, error = self._request("POST", "/login", json_body={"username": username, "password": password})
        if data and data.get("accessToken"):
            self.token = data["accessToken"]
        return data, error

    def logout(self) -> Result:
        data, error = self._request("POST", "/logout")
        if error is None:
            self.token = None
        return data, error

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------
    def list_bookings(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/admin/bookings")
        return data or [], error

    def list_bookings_by_status(self, status: str) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", f"/admin/bookings/status/{status}")
        return data or [], error

    def update_booking_status(self, booking_id: int, status: str) -> Result:
        return self._request("PATCH", f"/admin/bookings/{booking_id}/status", json_body={"status": status})

    def dashboard_stats(self) -> Result:
        return self._request("GET", "/admin/dashboard/stats")
