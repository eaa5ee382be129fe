"""
Read-only data helpers built on pandas.

    - `teams_frame(raw)` turns the `/api/teams` payload into a DataFrame.
    - `team_names(df)` gives the ordered, de-duplicated names used in team
        selectors on the Results and Schedule pages.
    - `sport_overview(results, schedule)` counts results and scheduled
        matches per sport for the home page.
"""

from typing import Any, Dict, List

import pandas as pd

from models.schema import coerce_list


def teams_frame(raw: Any) -> pd.DataFrame:
    rows = [t for t in coerce_list(raw) if isinstance(t, dict)]
    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=["name"])
    if "name" not in df.columns:
        df["name"] = ""
    df["name"] = df["name"].fillna("").astype(str).str.strip()
    df = df[df["name"] != ""]
    return df.reset_index(drop=True)


def team_names(df_teams: pd.DataFrame) -> List[str]:
    if df_teams.empty:
        return []
    return df_teams["name"].drop_duplicates().tolist()


def sport_overview(results: List[Dict[str, Any]], schedule: List[Dict[str, Any]]) -> pd.DataFrame:
    def _counts(records: List[Dict[str, Any]], column: str) -> pd.Series:
        sports = [str(r.get("sport") or "Unknown") for r in records]
        return pd.Series(sports, dtype="object").value_counts().rename(column)

    df = pd.concat(
        [_counts(schedule, "Scheduled"), _counts(results, "Results")], axis=1
    ).fillna(0).astype(int)
    df.index.name = "Sport"
    return df.sort_index().reset_index()
