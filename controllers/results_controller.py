from typing import Any, Dict, List

from common.constants import RESULTS_PATH
from controllers.page_controller import RosterPageController
from models.result_model import MATCH_RESULT, new_result, validate_results


class ResultsController(RosterPageController):
    resource_path = RESULTS_PATH
    resource_label = "result"
    schema = MATCH_RESULT

    save_success = "Results published successfully!"
    save_failure = "Failed to save results."
    delete_success = "Result deleted successfully!"
    delete_failure = "Failed to delete result."
    # The results endpoint reports logical failures as {"success": false, "message": ...}
    check_success_flag = True

    def validate(self, records: List[Dict[str, Any]]) -> None:
        validate_results(records)

    def add_result(self) -> Dict[str, Any]:
        return self.add(new_result(self.team_names))

    def upload_score_sheet(self, key, file_data: bytes, filename: str = "scoresheet") -> bool:
        return self.upload_file(key, "scoreSheetLink", file_data, filename)
