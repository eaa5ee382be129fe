"""
Password-gated commit flow shared by every admin page.

Every write (save or delete) goes through the same two steps:

    1. `request(CommitRequest)` runs the local checks. A `ValidationError`
        is reported straight away and the password prompt never opens.
    2. `submit(password)` sends the whole payload once, with the bearer token
        and the admin password. A rejected password puts the prompt back up
        until `max_attempts` is reached, after which the session is forcibly
        logged out. Any other failure closes the prompt.

State machine::

    IDLE --request--> AWAITING_PASSWORD --submit--> SUBMITTING
    SUBMITTING --ok--> IDLE
    SUBMITTING --wrong password--> AWAITING_PASSWORD | LOGGED_OUT
    SUBMITTING --other error--> IDLE
"""

from __future__ import annotations
import copy
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from common.constants import MAX_PASSWORD_ATTEMPTS
from common.errors import (
    ApiError, CommitStateError, PasswordError, RequestError, ServerLogicError, ValidationError,
)

logger = logging.getLogger(__name__)


class CommitState(Enum):
    IDLE = "idle"
    AWAITING_PASSWORD = "awaiting_password"
    SUBMITTING = "submitting"
    LOGGED_OUT = "logged_out"


class CommitKind(Enum):
    SAVE = "save"
    DELETE = "delete"


class Outcome(Enum):
    SAVED = "saved"
    RETRY = "retry"
    FAILED = "failed"
    LOGGED_OUT = "logged_out"


def _always_valid() -> None:
    return None


@dataclass
class CommitRequest:
    kind: CommitKind
    path: str
    payload: Any
    validate: Callable[[], None] = _always_valid
    on_result: Optional[Callable[[Outcome, Any], None]] = None
    label: str = ""
    success_message: str = "Saved successfully!"
    failure_message: str = "Failed to save."
    check_success_flag: bool = False    # body must carry a truthy `success`


def _noop_notify(level: str, message: str) -> None:
    return None


class CommitFlow:
    def __init__(
        self,
        client,
        notify: Callable[[str, str], None] = _noop_notify,
        on_forced_logout: Optional[Callable[[], None]] = None,
        max_attempts: int = MAX_PASSWORD_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.client = client
        self.notify = notify
        self.on_forced_logout = on_forced_logout
        self.max_attempts = max_attempts
        self.state = CommitState.IDLE
        self.pending: Optional[CommitRequest] = None
        self.attempts = 0
        self.last_error = ""

    @property
    def busy(self) -> bool:
        return self.state is CommitState.SUBMITTING

    @property
    def awaiting_password(self) -> bool:
        return self.state is CommitState.AWAITING_PASSWORD

    @property
    def attempts_left(self) -> int:
        return max(self.max_attempts - self.attempts, 0)

    def request(self, req: CommitRequest) -> bool:
        """Validate locally and open the password prompt. Returns False if refused."""
        if self.state is not CommitState.IDLE:
            logger.debug("Commit request %r ignored while %s", req.label, self.state.value)
            self.notify("warning", "Another change is waiting to be confirmed. Finish or cancel it first.")
            return False
        try:
            req.validate()
        except ValidationError as exc:
            self.notify("error", exc.message)
            return False

        # Capture the payload by value: edits made from now on go into the next commit
        req.payload = copy.deepcopy(req.payload)
        self.pending = req
        self.attempts = 0
        self.last_error = ""
        self.state = CommitState.AWAITING_PASSWORD
        logger.debug("Awaiting admin password for %s %s", req.kind.value, req.path)
        return True

    def cancel(self) -> None:
        if self.state is CommitState.AWAITING_PASSWORD:
            self._finish(CommitState.IDLE)

    def submit(self, password: str) -> Outcome:
        if self.state is not CommitState.AWAITING_PASSWORD or self.pending is None:
            raise CommitStateError(f"Cannot submit a password while {self.state.value}")
        req = self.pending
        self.state = CommitState.SUBMITTING
        try:
            response = self.client.post(req.path, req.payload, admin_password=password)
            if req.check_success_flag and not (isinstance(response, dict) and response.get("success")):
                message = response.get("message", "") if isinstance(response, dict) else ""
                raise ServerLogicError(message)
        except PasswordError:
            return self._wrong_password(req)
        except (RequestError, ServerLogicError) as exc:
            return self._fail(req, exc.server_message or req.failure_message)
        except ApiError as exc:
            logger.warning("%s %s failed: %s", req.kind.value, req.path, exc)
            return self._fail(req, req.failure_message)
        finally:
            if self.state is CommitState.SUBMITTING:
                # Success, or an error no handler above claimed
                self._finish(CommitState.IDLE)

        logger.info("%s %s committed", req.kind.value, req.path)
        self._finish(CommitState.IDLE)
        if req.on_result:
            req.on_result(Outcome.SAVED, req.payload)
        self.notify("success", req.success_message)
        return Outcome.SAVED

    def _wrong_password(self, req: CommitRequest) -> Outcome:
        self.attempts += 1
        if self.attempts >= self.max_attempts:
            logger.warning("Admin password rejected %d times; forcing logout", self.attempts)
            self._finish(CommitState.LOGGED_OUT)
            if req.on_result:
                req.on_result(Outcome.LOGGED_OUT, req.payload)
            self.notify("error", "Too many incorrect password attempts. You have been logged out.")
            if self.on_forced_logout:
                self.on_forced_logout()
            return Outcome.LOGGED_OUT

        self.state = CommitState.AWAITING_PASSWORD
        self.last_error = f"Incorrect password. {self.attempts_left} attempt(s) left."
        return Outcome.RETRY

    def _fail(self, req: CommitRequest, message: str) -> Outcome:
        self._finish(CommitState.IDLE)
        if req.on_result:
            req.on_result(Outcome.FAILED, req.payload)
        self.notify("error", message)
        return Outcome.FAILED

    def _finish(self, state: CommitState) -> None:
        self.state = state
        self.pending = None
        self.attempts = 0 if state is CommitState.IDLE else self.attempts
        self.last_error = ""

    def reset(self) -> None:
        """Leave LOGGED_OUT (e.g. after signing in again)."""
        self._finish(CommitState.IDLE)
