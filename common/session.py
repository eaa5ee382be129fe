"""
Admin session: the single owner of the bearer token.

The token is created at login, read by every API request and invalidated on
logout or on any authentication failure. Where it is persisted is decided by
the token store passed in; the Streamlit app uses a cookie-backed store (see
`controllers.auth_controller.CookieTokenStore`), tests use the in-memory one.
"""

from __future__ import annotations
import logging
from typing import Dict, Optional

from .constants import TOKEN_COOKIE

logger = logging.getLogger(__name__)


class MemoryTokenStore:
    def __init__(self):
        self._values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class AdminSession:
    def __init__(self, store=None, key: str = TOKEN_COOKIE):
        self.store = store if store is not None else MemoryTokenStore()
        self.key = key

    @property
    def token(self) -> Optional[str]:
        # Always read through the store so a token cleared elsewhere is seen
        # by the very next request.
        return self.store.get(self.key) or None

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    def start(self, token: str) -> None:
        if not token:
            raise ValueError("Cannot start a session without a token")
        self.store.set(self.key, token)
        logger.info("Admin session started")

    def invalidate(self) -> None:
        if self.store.get(self.key):
            logger.info("Admin session invalidated")
        self.store.delete(self.key)
