from typing import Any, Dict, Iterable, List, Optional

from common.errors import ValidationError
from models.schema import FieldSpec, RecordSchema

SCHEDULED_MATCH = RecordSchema(
    "ScheduledMatch",
    (
        FieldSpec("id"),
        FieldSpec("sport", "Football"),
        FieldSpec("category", "Men"),
        FieldSpec("teamA"),
        FieldSpec("teamB"),
        FieldSpec("date"),
        FieldSpec("time"),
        FieldSpec("venue"),
    ),
)

# Fields a new match copies from the most recent one so consecutive entries
# on the same day and ground need less typing.
INHERITED_FIELDS = ("sport", "category", "date", "time", "venue")


def _default_teams(team_names: List[str]) -> Dict[str, str]:
    return {
        "teamA": team_names[0] if len(team_names) > 0 else "",
        "teamB": team_names[1] if len(team_names) > 1 else "",
    }


def new_match(previous: Optional[Dict[str, Any]], team_names: List[str]) -> Dict[str, Any]:
    base = {k: previous.get(k) for k in INHERITED_FIELDS} if previous else {}
    base.update(_default_teams(team_names))
    return SCHEDULED_MATCH.normalize(base)


def duplicate_match(match: Dict[str, Any], team_names: List[str]) -> Dict[str, Any]:
    copy_ = {k: v for k, v in match.items() if k != "id"}
    copy_.update(_default_teams(team_names))
    return SCHEDULED_MATCH.normalize(copy_)


def validate_match(match: Dict[str, Any]) -> None:
    team_a, team_b = match.get("teamA"), match.get("teamB")
    if not team_a or not team_b:
        raise ValidationError(
            f"Match between {team_a or 'Unknown'} and {team_b or 'Unknown'} must have both teams selected."
        )
    if team_a == team_b:
        raise ValidationError(
            f"Team A and Team B cannot be the same for match between {team_a} and {team_b}."
        )
    if not match.get("date") or not match.get("time") or not match.get("venue"):
        raise ValidationError(
            f"Date, Time, and Venue are required for match between {team_a} and {team_b} ({match.get('sport')})."
        )


def validate_matches(matches: Iterable[Dict[str, Any]]) -> None:
    for match in matches:
        validate_match(match)
