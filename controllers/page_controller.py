"""
Base controllers composing the API client, the editor state and the commit
flow. One subclass per admin page lives next to this module.

Controllers are UI-agnostic: they report to the page through a
`notify(level, message)` callback and ask it to go back to login through
`on_forced_logout()`. The Streamlit pages keep one controller per browser
session in `st.session_state`.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Hashable, List, Optional, Set

from common.constants import MAX_PASSWORD_ATTEMPTS, TEAMS_PATH, UPLOAD_PATH
from common.errors import ApiError, AuthError, ServerLogicError
from controllers.commit_flow import CommitFlow, CommitKind, CommitRequest, Outcome
from controllers.data_controller import team_names as roster_names, teams_frame
from controllers.editor_state import CollectionEditor, Key
from models.schema import RecordSchema

logger = logging.getLogger(__name__)


def _noop_notify(level: str, message: str) -> None:
    return None


class UploadTracker:
    """Per-record `uploading` flags; uploads for different records are independent."""

    def __init__(self):
        self._active: Set[Hashable] = set()

    def begin(self, key: Hashable) -> None:
        self._active.add(key)

    def finish(self, key: Hashable) -> None:
        self._active.discard(key)

    def is_uploading(self, key: Hashable) -> bool:
        return key in self._active

    @property
    def active(self) -> Set[Hashable]:
        return set(self._active)


class PageController:
    resource_path = ""
    resource_label = "item"

    def __init__(
        self,
        client,
        notify: Callable[[str, str], None] = _noop_notify,
        on_forced_logout: Optional[Callable[[], None]] = None,
        max_password_attempts: int = MAX_PASSWORD_ATTEMPTS,
    ):
        self.client = client
        self.notify = notify
        self._on_forced_logout = on_forced_logout
        self.uploads = UploadTracker()
        self.loaded = False
        self.commit_flow = CommitFlow(
            client, notify=self._notify, on_forced_logout=self.force_logout,
            max_attempts=max_password_attempts,
        )

    def _notify(self, level: str, message: str) -> None:
        self.notify(level, message)

    # ----- loading -----
    def fetch(self) -> Any:
        return self.client.get(self.resource_path)

    def apply_loaded(self, data: Any) -> None:
        raise NotImplementedError

    def load(self) -> bool:
        try:
            data = self.fetch()
        except AuthError:
            self.force_logout()
            return False
        except ApiError as exc:
            logger.warning("Loading %s failed: %s", self.resource_path, exc)
            self.notify("error", f"Could not load {self.resource_label} data.")
            return False
        self.apply_loaded(data)
        self.loaded = True
        return True

    @property
    def saving(self) -> bool:
        return self.commit_flow.busy

    # ----- session -----
    def force_logout(self) -> None:
        logger.warning("Forcing logout from %s page", self.resource_label)
        self.client.logout()
        if self._on_forced_logout:
            self._on_forced_logout()

    # ----- uploads -----
    def write_upload(self, key: Hashable, field: str, url: str) -> None:
        raise NotImplementedError

    def begin_upload(self, key: Hashable) -> None:
        self.uploads.begin(key)

    def complete_upload(self, key: Hashable, field: str, url: str) -> None:
        try:
            self.write_upload(key, field, url)
        finally:
            self.uploads.finish(key)

    def fail_upload(self, key: Hashable, exc: ApiError) -> None:
        # The field keeps its previous value on any failure
        self.uploads.finish(key)
        if isinstance(exc, AuthError):
            self.force_logout()
        elif isinstance(exc, ServerLogicError):
            self.notify("error", f"Upload failed: {exc.server_message or 'Unknown error'}")
        else:
            self.notify("error", "Error uploading file")

    def upload_file(self, key: Hashable, field: str, file_data: bytes, filename: str = "upload") -> bool:
        if not file_data:
            return False
        self.begin_upload(key)
        try:
            url = self.client.upload(UPLOAD_PATH, file_data, filename)
        except ApiError as exc:
            logger.warning("Upload for %s %r failed: %s", self.resource_label, key, exc)
            self.fail_upload(key, exc)
            return False
        logger.info("Uploaded %s for %s %r", filename, self.resource_label, key)
        self.complete_upload(key, field, url)
        return True


class CollectionPageController(PageController):
    schema: RecordSchema = None
    filter_field: Optional[str] = None

    save_success = "Saved successfully!"
    save_failure = "Failed to save."
    delete_success = "Deleted successfully!"
    delete_failure = "Failed to delete."
    check_success_flag = False

    def __init__(self, client, **kwargs):
        super().__init__(client, **kwargs)
        self.editor = CollectionEditor(self.schema, filter_field=self.filter_field)

    def apply_loaded(self, data: Any) -> None:
        self.editor.load(data)

    @property
    def records(self) -> List[Dict[str, Any]]:
        return self.editor.records

    def validate(self, records: List[Dict[str, Any]]) -> None:
        """Raise `ValidationError` for the first record that cannot be saved."""

    def add(self, defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.editor.add_record(defaults)

    def update_field(self, key: Key, field: str, value: Any) -> None:
        self.editor.update_field(key, field, value)

    def select(self, record_id: str) -> None:
        self.editor.select(record_id)

    def set_filter(self, value: str) -> None:
        self.editor.set_filter(value)

    def write_upload(self, key: Hashable, field: str, url: str) -> None:
        self.editor.update_field(key, field, url)

    def save(self) -> bool:
        return self._commit_save(self.editor.snapshot())

    def delete(self, key: Key) -> bool:
        index, candidate = self.editor.remove_record(key)
        return self._commit_delete(index, candidate)

    def _commit_save(self, payload: List[Dict[str, Any]]) -> bool:
        return self.commit_flow.request(CommitRequest(
            kind=CommitKind.SAVE,
            path=self.resource_path,
            payload=payload,
            validate=lambda: self.validate(payload),
            on_result=self._after_save,
            label=f"save {self.resource_label}",
            success_message=self.save_success,
            failure_message=self.save_failure,
            check_success_flag=self.check_success_flag,
        ))

    def _commit_delete(self, index: int, candidate: List[Dict[str, Any]]) -> bool:
        return self.commit_flow.request(CommitRequest(
            kind=CommitKind.DELETE,
            path=self.resource_path,
            payload=candidate,
            on_result=lambda outcome, payload: self._after_delete(outcome, payload, index),
            label=f"delete {self.resource_label}",
            success_message=self.delete_success,
            failure_message=self.delete_failure,
        ))

    def _after_save(self, outcome: Outcome, payload: List[Dict[str, Any]]) -> None:
        if outcome is Outcome.SAVED:
            self.editor.replace(payload)

    def _after_delete(self, outcome: Outcome, payload: List[Dict[str, Any]], index: int) -> None:
        if outcome is Outcome.SAVED:
            self.editor.apply_removal(payload, index)


class RosterPageController(CollectionPageController):
    """Collection page whose records reference teams from `/api/teams`."""

    filter_field = "sport"

    def __init__(self, client, **kwargs):
        super().__init__(client, **kwargs)
        self.teams = teams_frame([])

    def fetch(self) -> Any:
        return self.client.get(self.resource_path), self.client.get(TEAMS_PATH)

    def apply_loaded(self, data: Any) -> None:
        records, teams = data
        self.teams = teams_frame(teams)
        self.editor.load(records)

    @property
    def team_names(self) -> List[str]:
        return roster_names(self.teams)
