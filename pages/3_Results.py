import streamlit as st

from controllers.auth_controller import ensure_auth, get_api_client, logout_button, redirect_to_login
from controllers.results_controller import ResultsController
from common.constants import CATEGORIES, SPORTS, STREAM_STATUSES
from common.ui import (
    edit_choice, edit_date, edit_text, get_page_controller, new_upload, password_prompt,
    push_notice, record_picker, render_notices, sidebar_header, source_type_toggle, team_options,
)
from common.utils import configure_logging, is_valid_url, option_index, safe_rerun, selectbox_with_placeholder
from models.result_model import winner_options

st.set_page_config(page_title="Manage Results", layout="wide")
configure_logging()

CTRL_KEY = "results_ctrl"


def _controller() -> ResultsController:
    return get_page_controller(CTRL_KEY, lambda: ResultsController(
        get_api_client(), notify=push_notice, on_forced_logout=redirect_to_login,
    ))


def _score(value) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _result_form(ctrl: ResultsController, result: dict, rev: int):
    rid = result["id"]
    k = f"{rev}_{rid}"
    set_ = lambda field: (lambda v: ctrl.update_field(rid, field, v))

    with st.container(border=True):
        st.markdown("#### Event Details")
        c1, c2, c3 = st.columns(3)
        with c1:
            edit_choice("Sport", SPORTS if result["sport"] in SPORTS else [result["sport"]] + SPORTS,
                        result["sport"], f"sport_{k}", set_("sport"))
        with c2:
            edit_choice("Category", CATEGORIES, result["category"], f"category_{k}", set_("category"))
        with c3:
            edit_date("Date", result["date"], f"date_{k}", set_("date"))

        c1, c2 = st.columns([2, 1])
        with c1:
            edit_text("Live stream link", result["liveLink"], f"live_{k}", set_("liveLink"))
            if not is_valid_url(result["liveLink"]):
                st.warning("Please enter a valid URL (https://...)")
        with c2:
            edit_choice("Stream status", STREAM_STATUSES, result["streamStatus"], f"stream_{k}", set_("streamStatus"))

        st.markdown("#### Score Sheet")
        mode = source_type_toggle(result["scoreSheetType"], f"sheet_type_{k}", set_("scoreSheetType"))
        if mode == "upload":
            picked = new_upload("Score sheet file", f"sheet_file_{k}", types=["png", "jpg", "jpeg", "pdf"])
            if ctrl.uploads.is_uploading(rid):
                st.caption("Uploading...")
            if picked:
                with st.spinner("Uploading..."):
                    ctrl.upload_score_sheet(rid, *picked)
                safe_rerun()
            if result["scoreSheetLink"]:
                st.success(f"File uploaded: {result['scoreSheetLink'].split('/')[-1]}")
        else:
            edit_text("Score sheet URL", result["scoreSheetLink"], f"sheet_url_{k}", set_("scoreSheetLink"))
            if not is_valid_url(result["scoreSheetLink"]):
                st.warning("Please enter a valid URL (https://...)")

        st.markdown("#### Score")
        teams = team_options(ctrl.team_names, result["teamA"], result["teamB"])
        c1, c2, c3, c4 = st.columns([3, 1, 1, 3])
        with c1:
            edit_choice("Team A", teams, result["teamA"], f"teamA_{k}", set_("teamA"))
        with c2:
            a = st.number_input("Score A", min_value=0, step=1, value=_score(result["scoreA"]), key=f"scoreA_{k}")
            if a != result["scoreA"]:
                ctrl.update_field(rid, "scoreA", int(a))
        with c3:
            b = st.number_input("Score B", min_value=0, step=1, value=_score(result["scoreB"]), key=f"scoreB_{k}")
            if b != result["scoreB"]:
                ctrl.update_field(rid, "scoreB", int(b))
        with c4:
            edit_choice("Team B", teams, result["teamB"], f"teamB_{k}", set_("teamB"))

        # Re-read: the team selectors above may have just changed the record
        current = ctrl.editor.get(rid)
        options = winner_options(current)
        st.markdown("Winner")
        winner = selectbox_with_placeholder(
            "Select Winner", options,
            key=f"winner_{k}_{current['teamA']}_{current['teamB']}",
            default_index=option_index(options, current["winner"], default=None),
        )
        if winner and winner != current["winner"]:
            ctrl.update_field(rid, "winner", winner)

        if st.button("🗑️ Delete Result", key=f"delete_{k}"):
            ctrl.delete(rid)
            safe_rerun()


def main():
    ensure_auth()
    sidebar_header(user=st.session_state.get("username"), show_custom_nav=True)
    logout_button()

    ctrl = _controller()
    c1, c2, c3 = st.columns([3, 1, 1])
    c1.title("🏆 Manage Results")
    if c2.button("➕ Add Result", disabled=not ctrl.loaded):
        ctrl.add_result()
    if c3.button("💾 Publish", disabled=ctrl.saving or not ctrl.loaded, type="primary"):
        ctrl.save()
    render_notices()
    password_prompt(ctrl.commit_flow, "results")

    if not ctrl.loaded:
        if st.button("Retry loading"):
            ctrl.load()
            safe_rerun()
        st.stop()

    selected = record_picker(ctrl, "results", noun="Result")
    if selected is None:
        st.info("No results yet. Click 'Add Result' to start." if not ctrl.records
                else "Select a result from the dropdown to edit.")
        return
    _result_form(ctrl, selected, ctrl.editor.revision)


if __name__ == "__main__":
    main()
