"""
Exception types shared by the API client, the editors and the controllers.

The hierarchy separates failures by how the UI reacts to them:
    - `ValidationError` is raised before any network call; the password
        prompt never opens.
    - `AuthError` means the bearer token was rejected; the client has already
        cleared it and the page must send the user back to login.
    - `PasswordError` means the secondary admin password was rejected on a
        gated write; the token is untouched and the prompt is shown again.
    - `RequestError`, `ServerLogicError` and `TransportError` end the current
        operation with a message and leave the token alone.
"""

from __future__ import annotations
from typing import Optional


class AdminError(Exception):
    """Base class for every error raised by this app."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(AdminError):
    pass


class CommitStateError(AdminError):
    pass


class ApiError(AdminError):
    def __init__(self, message: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class AuthError(ApiError):
    pass


class PasswordError(ApiError):
    pass


class RequestError(ApiError):
    def __init__(self, message: str = "", status: Optional[int] = None, server_message: str = ""):
        super().__init__(message, status)
        self.server_message = server_message


class ServerLogicError(ApiError):
    def __init__(self, server_message: str = "", status: Optional[int] = None):
        super().__init__(server_message or "Request was not accepted by the server", status)
        self.server_message = server_message


class TransportError(ApiError):
    pass
