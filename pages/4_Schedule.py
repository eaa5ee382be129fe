import streamlit as st

from controllers.auth_controller import ensure_auth, get_api_client, logout_button, redirect_to_login
from controllers.schedule_controller import ScheduleController
from common.constants import CATEGORIES, SPORTS, VENUES
from common.ui import (
    edit_choice, edit_date, edit_text, edit_time, get_page_controller, password_prompt,
    push_notice, record_picker, render_notices, sidebar_header, team_options,
)
from common.utils import configure_logging, safe_rerun

st.set_page_config(page_title="Manage Schedule", layout="wide")
configure_logging()

CTRL_KEY = "schedule_ctrl"
CUSTOM_VENUE = "✏️ Custom..."


def _controller() -> ScheduleController:
    return get_page_controller(CTRL_KEY, lambda: ScheduleController(
        get_api_client(), notify=push_notice, on_forced_logout=redirect_to_login,
    ))


def _match_form(ctrl: ScheduleController, match: dict, rev: int):
    mid = match["id"]
    k = f"{rev}_{mid}"
    set_ = lambda field: (lambda v: ctrl.update_field(mid, field, v))

    with st.container(border=True):
        h1, h2 = st.columns([4, 1])
        h1.subheader(match["sport"])
        h1.caption(f'{match["category"]} • {match["teamA"]} vs {match["teamB"]}')
        if h2.button("🗑️ Delete", key=f"delete_{k}"):
            ctrl.delete(mid)
            safe_rerun()

        st.markdown("#### Event Details")
        c1, c2, c3, c4 = st.columns(4)
        with c1:
            edit_choice("Sport", SPORTS if match["sport"] in SPORTS else [match["sport"]] + SPORTS,
                        match["sport"], f"sport_{k}", set_("sport"))
        with c2:
            edit_choice("Category", CATEGORIES, match["category"], f"category_{k}", set_("category"))
        with c3:
            edit_date("📅 Date", match["date"], f"date_{k}", set_("date"))
        with c4:
            edit_time("🕒 Time", match["time"], f"time_{k}", set_("time"))

        st.markdown("#### Teams")
        teams = team_options(ctrl.team_names, match["teamA"], match["teamB"])
        c1, c2, c3 = st.columns([5, 1, 5])
        with c1:
            edit_choice("Team A", [t for t in teams if t != match["teamB"]], match["teamA"], f"teamA_{k}", set_("teamA"))
        c2.markdown("<div style='text-align:center;padding-top:2rem'><b>VS</b></div>", unsafe_allow_html=True)
        with c3:
            edit_choice("Team B", [t for t in teams if t != match["teamA"]], match["teamB"], f"teamB_{k}", set_("teamB"))

        st.markdown("#### 📍 Venue")
        c1, c2 = st.columns(2)
        is_known = match["venue"] in VENUES
        with c1:
            options = VENUES + [CUSTOM_VENUE]
            picked = st.selectbox(
                "Venue", options, index=options.index(match["venue"] if is_known else CUSTOM_VENUE),
                key=f"venue_pick_{k}", label_visibility="collapsed",
            )
            if picked != CUSTOM_VENUE and picked != match["venue"]:
                ctrl.update_field(mid, "venue", picked)
        if picked == CUSTOM_VENUE:
            with c2:
                edit_text("Custom venue", "" if is_known else match["venue"], f"venue_custom_{k}",
                          set_("venue"), placeholder="Enter custom venue", label_visibility="collapsed")


def main():
    ensure_auth()
    sidebar_header(user=st.session_state.get("username"), show_custom_nav=True)
    logout_button()

    ctrl = _controller()
    c1, c2, c3, c4 = st.columns([3, 1, 1, 1])
    c1.title("📅 Manage Schedule")
    if c2.button("➕ Add Match", disabled=not ctrl.loaded):
        ctrl.add_match()
    if c3.button("📄 Duplicate", disabled=not ctrl.loaded or ctrl.editor.selected is None):
        ctrl.duplicate_selected()
    if c4.button("💾 Save Changes", disabled=ctrl.saving or not ctrl.loaded, type="primary"):
        ctrl.save()
    render_notices()
    password_prompt(ctrl.commit_flow, "schedule")

    if not ctrl.loaded:
        if st.button("Retry loading"):
            ctrl.load()
            safe_rerun()
        st.stop()

    selected = record_picker(ctrl, "schedule")
    if selected is None:
        st.info("No matches scheduled. Click 'Add Match' to start." if not ctrl.records
                else "Select a match from the dropdown to edit.")
        return
    _match_form(ctrl, selected, ctrl.editor.revision)


if __name__ == "__main__":
    main()
