from typing import Any, Dict, List

from common.constants import GALLERY_PATH
from common.errors import ValidationError
from controllers.editor_state import Key
from controllers.page_controller import CollectionPageController
from models.gallery_model import GALLERY_ITEM, split_complete


class GalleryController(CollectionPageController):
    resource_path = GALLERY_PATH
    resource_label = "gallery"
    schema = GALLERY_ITEM

    save_success = "Gallery saved successfully!"
    save_failure = "Failed to save gallery."
    delete_success = "Image removed successfully!"
    delete_failure = "Failed to remove image."

    def add_image(self) -> Dict[str, Any]:
        return self.add({"type": "url"})

    def incomplete_count(self) -> int:
        return len(split_complete(self.editor.records)[1])

    def _drop_warning(self, count: int, action: str) -> None:
        self.notify(
            "warning",
            f"{count} image(s) have a missing Title or URL and will be removed. "
            f"Confirm to continue {action}.",
        )

    def save(self, confirm_drop: bool = False) -> bool:
        """Images without a title or URL are dropped on save, but only once confirmed.

        The drop is part of the committed payload; local state keeps the
        incomplete images until the server accepts it.
        """
        complete, incomplete = split_complete(self.editor.snapshot())
        if incomplete and not confirm_drop:
            self._drop_warning(len(incomplete), "saving")
            return False
        return self._commit_save(complete)

    def delete(self, key: Key, confirm_drop: bool = False) -> bool:
        # Deleting commits the whole gallery, so incomplete images go the same way as on save
        index, candidate = self.editor.remove_record(key)
        complete, incomplete = split_complete(candidate)
        if incomplete and not confirm_drop:
            self._drop_warning(len(incomplete), "deleting")
            return False
        shift = len(split_complete(candidate[:index])[1])
        return self._commit_delete(index - shift, complete)

    def upload_image(self, key: Key, file_data: bytes, filename: str = "image") -> bool:
        return self.upload_file(key, "url", file_data, filename)

    def validate(self, records: List[Dict[str, Any]]) -> None:
        if split_complete(records)[1]:
            raise ValidationError("Every image needs a Title and URL.")
