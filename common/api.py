"""
Thin REST client for the event website API.

`ApiClient` wraps a `requests.Session`, attaches the bearer token held by an
`AdminSession` and turns every failed response into one of the exception
types in `common.errors`:

    - 401/403 on a plain request -> `AuthError` (the token is cleared first),
    - 401/403 on a password-gated write -> `PasswordError` (token kept),
    - any other non-2xx -> `RequestError` with the server's `message` if any,
    - network failures and malformed JSON -> `TransportError`.

Gated writes are plain `post` calls with `admin_password` set; the password
travels in the `x-admin-password` header next to the bearer token.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import requests

from .constants import (
    ADMIN_PASSWORD_HEADER, API_TIMEOUT, API_URL, AUTH_FAILURE_STATUSES,
    LOGIN_PATH, LOGOUT_PATH, USER_AGENT,
)
from .errors import (
    ApiError, AuthError, PasswordError, RequestError, ServerLogicError, TransportError,
)
from .session import AdminSession

logger = logging.getLogger(__name__)


def _server_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return ""
    if isinstance(data, dict):
        return str(data.get("message") or "")
    return ""


class ApiClient:
    def __init__(
        self,
        base_url: str = API_URL,
        session: Optional[AdminSession] = None,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = API_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else AdminSession()
        self.http = http if http is not None else requests.Session()
        self.http.headers.update({"User-Agent": USER_AGENT})
        self.timeout = timeout

    # ----- low level -----
    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, admin_password: Optional[str] = None) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        token = self.session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if admin_password is not None:
            headers[ADMIN_PASSWORD_HEADER] = admin_password
        return headers

    def _send(self, method: str, path: str, admin_password: Optional[str] = None, **kwargs) -> Any:
        url = self._url(path)
        try:
            resp = self.http.request(
                method, url,
                headers=self._headers(admin_password),
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(f"Could not reach the server: {exc}") from exc
        return self._handle(resp, method, path, gated=admin_password is not None)

    def _handle(self, resp: requests.Response, method: str, path: str, gated: bool) -> Any:
        status = resp.status_code
        if status in AUTH_FAILURE_STATUSES:
            if gated:
                logger.info("%s %s rejected the admin password (%s)", method, path, status)
                raise PasswordError("Incorrect admin password", status)
            logger.warning("%s %s unauthorized (%s); clearing token", method, path, status)
            self.session.invalidate()
            raise AuthError("Unauthorized", status)

        if not resp.ok:
            server_msg = _server_message(resp)
            logger.warning("%s %s -> %s %s", method, path, status, server_msg or resp.reason)
            raise RequestError(f"API Error: {resp.reason}", status, server_message=server_msg)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("%s %s returned a malformed body", method, path)
            raise TransportError("Malformed response from server", status) from exc

    # ----- public operations -----
    def get(self, path: str) -> Any:
        return self._send("GET", path)

    def post(self, path: str, body: Any, admin_password: Optional[str] = None) -> Any:
        # `json=` lets requests serialize the body and set the JSON content type
        return self._send("POST", path, admin_password=admin_password, json=body)

    def upload(self, path: str, file_data: bytes, filename: str = "upload", field: str = "image") -> str:
        """Send a file as multipart form data and return the server-assigned URL.

        No content type is set here: requests derives the multipart boundary
        header from `files=`.
        """
        data = self._send("POST", path, files={field: (filename, file_data)})
        if not isinstance(data, dict) or not data.get("success"):
            message = data.get("message", "") if isinstance(data, dict) else ""
            raise ServerLogicError(message or "Unknown error")
        return str(data.get("url", ""))

    def login(self, username: str, password: str) -> str:
        data = self.post(LOGIN_PATH, {"username": username, "password": password})
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            message = data.get("message", "") if isinstance(data, dict) else ""
            raise ServerLogicError(message or "Login failed")
        self.session.start(token)
        return token

    def logout(self) -> None:
        """Invalidate the token server-side if possible; always clear it locally."""
        try:
            if self.session.token:
                self._send("POST", LOGOUT_PATH, json={})
        except ApiError as exc:
            logger.warning("Logout API error (ignored): %s", exc)
        finally:
            self.session.invalidate()
