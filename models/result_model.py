"""
Match result record and its publish-time checks.

Fields mirror the JSON the results endpoint stores:
    - `sport`, `category` (Men/Women/Mixed), `teamA`, `teamB`,
    - `scoreA`, `scoreB` (non-negative integers),
    - `winner` (one of the two team names or "Draw"),
    - `date`, `liveLink`, `streamStatus` (Ended/Live/Upcoming),
    - `scoreSheetType` (url/upload) and `scoreSheetLink`.
"""

from typing import Any, Dict, Iterable, List

from common.constants import DRAW
from common.errors import ValidationError
from models.schema import FieldSpec, RecordSchema

MATCH_RESULT = RecordSchema(
    "MatchResult",
    (
        FieldSpec("id"),
        FieldSpec("sport", "Football"),
        FieldSpec("category", "Men"),
        FieldSpec("teamA"),
        FieldSpec("teamB"),
        FieldSpec("scoreA", 0),
        FieldSpec("scoreB", 0),
        FieldSpec("winner"),
        FieldSpec("date"),
        FieldSpec("liveLink"),
        FieldSpec("streamStatus", "Ended"),
        FieldSpec("scoreSheetType", "url"),
        FieldSpec("scoreSheetLink"),
    ),
)


def new_result(team_names: List[str]) -> Dict[str, Any]:
    return MATCH_RESULT.normalize({
        "teamA": team_names[0] if len(team_names) > 0 else "",
        "teamB": team_names[1] if len(team_names) > 1 else "",
    })


def winner_options(result: Dict[str, Any]) -> List[str]:
    options = [DRAW]
    for side in ("teamA", "teamB"):
        if result.get(side) and result[side] not in options:
            options.append(result[side])
    return options


def _score(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Score '{value}' is not a whole number.") from None


def validate_result(result: Dict[str, Any]) -> None:
    team_a, team_b = result.get("teamA"), result.get("teamB")
    if not team_a or not team_b:
        raise ValidationError(
            f"Match between {team_a or 'Unknown'} and {team_b or 'Unknown'} must have both teams selected."
        )
    if team_a == team_b:
        raise ValidationError(
            f"Team A and Team B cannot be the same for match between {team_a} and {team_b}."
        )
    if _score(result.get("scoreA")) < 0 or _score(result.get("scoreB")) < 0:
        raise ValidationError(f"Scores cannot be negative for match between {team_a} and {team_b}.")
    winner = result.get("winner")
    if not winner:
        raise ValidationError(f"Please select a Winner (or Draw) for match between {team_a} and {team_b}.")
    if winner not in (team_a, team_b, DRAW):
        raise ValidationError(
            f"Winner '{winner}' is not one of the teams for match between {team_a} and {team_b}."
        )


def validate_results(results: Iterable[Dict[str, Any]]) -> None:
    for result in results:
        validate_result(result)
