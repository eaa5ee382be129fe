"""
Controller for the Contact page.

Contact is a single object rather than a list, so this controller uses an
`ObjectEditor`. Coordinators are addressed by their position in the
`coordinators` list; removing one is a gated commit of the whole contact
object without that coordinator.
"""

from typing import Any, Dict, Optional

from common.constants import CONTACT_PATH
from controllers.commit_flow import CommitKind, CommitRequest, Outcome
from controllers.editor_state import ObjectEditor
from controllers.page_controller import PageController
from models.contact_model import CONTACT, new_coordinator, validate_contact


class ContactController(PageController):
    resource_path = CONTACT_PATH
    resource_label = "contact"

    def __init__(self, client, **kwargs):
        super().__init__(client, **kwargs)
        self.editor = ObjectEditor(CONTACT)

    def apply_loaded(self, data: Any) -> None:
        self.editor.load(data)

    @property
    def contact(self) -> Optional[Dict[str, Any]]:
        return self.editor.data

    # ----- edits -----
    def update_field(self, field: str, value: Any) -> None:
        self.editor.update_field(field, value)

    def update_social(self, platform: str, value: str) -> None:
        self.editor.update_nested("socialMedia", platform, value)

    def add_coordinator(self, name: str, role: str) -> bool:
        if not name:
            return False
        if not role:
            self.notify("error", "Role is required to add a coordinator.")
            return False
        self.editor.prepend_item("coordinators", new_coordinator(name, role))
        return True

    def update_coordinator(self, index: int, field: str, value: Any) -> None:
        self.editor.update_item("coordinators", index, field, value)

    def write_upload(self, key, field: str, url: str) -> None:
        self.update_coordinator(key, field, url)

    def upload_coordinator_image(self, index: int, file_data: bytes, filename: str = "image") -> bool:
        return self.upload_file(index, "image", file_data, filename)

    # ----- commits -----
    def save(self) -> bool:
        if not self.editor.loaded:
            return False
        payload = self.editor.snapshot()
        return self.commit_flow.request(CommitRequest(
            kind=CommitKind.SAVE,
            path=self.resource_path,
            payload=payload,
            validate=lambda: validate_contact(payload),
            on_result=self._apply_committed,
            label="save contact",
            success_message="Contact info saved successfully!",
            failure_message="Failed to save contact info.",
        ))

    def remove_coordinator(self, index: int) -> bool:
        if not self.editor.loaded:
            return False
        candidate = self.editor.without_item("coordinators", index)
        return self.commit_flow.request(CommitRequest(
            kind=CommitKind.DELETE,
            path=self.resource_path,
            payload=candidate,
            on_result=self._apply_committed,
            label="remove coordinator",
            success_message="Coordinator removed successfully!",
            failure_message="Failed to remove coordinator.",
        ))

    def _apply_committed(self, outcome: Outcome, payload: Dict[str, Any]) -> None:
        if outcome is Outcome.SAVED:
            self.editor.replace(payload)
