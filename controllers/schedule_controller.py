from typing import Any, Dict, List, Optional

from common.constants import SCHEDULE_PATH
from controllers.page_controller import RosterPageController
from models.schedule_model import SCHEDULED_MATCH, duplicate_match, new_match, validate_matches


class ScheduleController(RosterPageController):
    resource_path = SCHEDULE_PATH
    resource_label = "schedule"
    schema = SCHEDULED_MATCH

    save_success = "Schedule saved successfully!"
    save_failure = "Failed to save schedule."
    delete_success = "Match deleted successfully!"
    delete_failure = "Failed to delete match."

    def validate(self, records: List[Dict[str, Any]]) -> None:
        validate_matches(records)

    def add_match(self) -> Dict[str, Any]:
        # New matches go to the top, so the first record is the latest entry
        records = self.editor.records
        previous = records[0] if records else None
        return self.add(new_match(previous, self.team_names))

    def duplicate_selected(self) -> Optional[Dict[str, Any]]:
        selected = self.editor.selected
        if selected is None:
            return None
        return self.add(duplicate_match(selected, self.team_names))
