"""DevConnector API client.

This module defines a thin client around the DevConnector REST API.
It uses the ``requests`` library internally and never raises on HTTP
or transport errors: every call returns a tuple ``(data, error)``
where exactly one side is meaningful.  ``error`` is a dictionary::

    {"status_code": 400, "message": "Profile not found", "errors": []}

``errors`` carries the per-field validation messages the server sends
for a 400 on a form submission, so callers can show one alert per
field.

Authentication follows the web client: after login the token is set
once with :meth:`DevConnectorAPI.set_auth_token` and travels in the
``x-auth-token`` header of every later request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class DevConnectorAPI:
    """Client for interacting with the DevConnector API."""

    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        *,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Root of the API, including the ``/api`` prefix.  The
                default matches ``run.py``, which serves on port 5000.
            token: Optional token to install immediately.
            session: Optional ``requests.Session`` (tests pass a fake).
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.set_auth_token(token)

    def set_auth_token(self, token: Optional[str]) -> None:
        """Install ``token`` as the ``x-auth-token`` header, or remove it."""
        if token:
            self.session.headers["x-auth-token"] = token
        else:
            self.session.headers.pop("x-auth-token", None)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> Result:
        """Perform an HTTP request to the API.

        Returns ``(data, None)`` on success and ``(None, error)`` on
        failure.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            error = _describe_http_error(exc)
            logger.error("API request failed (%s): %s", error["status_code"], error["message"])
            return None, error
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "errors": []}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> Result:
        return self._request("POST", "/users", json_body={"name": name, "email": email, "password": password})

    def login(self, email: str, password: str) -> Result:
        """Log in and install the returned token on success."""
        data, error = self._request("POST", "/auth", json_body={"email": email, "password": password})
        if data and data.get("token"):
            self.set_auth_token(data["token"])
        return data, error

    def load_user(self) -> Result:
        return self._request("GET", "/auth")

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------
    def get_current_profile(self) -> Result:
        return self._request("GET", "/profile/me")

    def get_profiles(self) -> Result:
        return self._request("GET", "/profile")

    def get_profile_by_id(self, user_id: str) -> Result:
        return self._request("GET", f"/profile/user/{user_id}")

    def get_github_repos(self, username: str) -> Result:
        return self._request("GET", f"/profile/github/{username}")

    def create_profile(self, form_data: Dict[str, Any]) -> Result:
        return self._request("POST", "/profile", json_body=form_data)

    def add_experience(self, form_data: Dict[str, Any]) -> Result:
        return self._request("PUT", "/profile/experience", json_body=form_data)

    def add_education(self, form_data: Dict[str, Any]) -> Result:
        return self._request("PUT", "/profile/education", json_body=form_data)

    def delete_experience(self, exp_id: str) -> Result:
        return self._request("DELETE", f"/profile/experience/{exp_id}")

    def delete_education(self, edu_id: str) -> Result:
        return self._request("DELETE", f"/profile/education/{edu_id}")

    def delete_account(self) -> Result:
        return self._request("DELETE", "/profile")

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------
    def get_posts(self) -> Result:
        return self._request("GET", "/posts")

    def get_post(self, post_id: str) -> Result:
        return self._request("GET", f"/posts/{post_id}")

    def add_post(self, form_data: Dict[str, Any]) -> Result:
        return self._request("POST", "/posts", json_body=form_data)

    def delete_post(self, post_id: str) -> Result:
        return self._request("DELETE", f"/posts/{post_id}")

    def add_like(self, post_id: str) -> Result:
        return self._request("PUT", f"/posts/like/{post_id}")

    def remove_like(self, post_id: str) -> Result:
        return self._request("PUT", f"/posts/unlike/{post_id}")

    def add_comment(self, post_id: str, form_data: Dict[str, Any]) -> Result:
        return self._request("POST", f"/posts/comment/{post_id}", json_body=form_data)

    def delete_comment(self, post_id: str, comment_id: str) -> Result:
        return self._request("DELETE", f"/posts/comment/{post_id}/{comment_id}")


def _describe_http_error(exc: requests.HTTPError) -> Dict[str, Any]:
    """Build the ``error`` dictionary for a non-2xx response.

    The server answers ``{"detail": "<message>"}`` for most errors and
    ``{"detail": [{"msg": ...}, ...]}`` for validation failures.
    """
    response = exc.response
    status = response.status_code if response is not None else None
    message = ""
    errors: List[Dict[str, Any]] = []
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        detail = body.get("detail") if isinstance(body, dict) else None
        if isinstance(detail, list):
            errors = [e for e in detail if isinstance(e, dict)]
            message = "; ".join(str(e.get("msg", "")) for e in errors)
        elif detail:
            message = str(detail)
        elif body is None:
            message = response.text
        if not message:
            message = response.reason or ""
    if not message:
        message = str(exc)
    return {"status_code": status, "message": message, "errors": errors}
