"""
Main application entry for the sports-event admin console.

This module defines the Home page the admin sees after opening the app. It
handles:
    - application configuration (`st.set_page_config`),
    - logging setup (`.env` values are loaded by `common.constants`),
    - admin login and sidebar rendering (delegated to
        `controllers.auth_controller` and `common.ui`),
    - a short overview of what is currently published: scheduled matches and
        results per sport, and the team roster.

Editing happens on the pages under `pages/`; each one keeps its own
controller in `st.session_state`.
"""

# Import libraries
import streamlit as st

from controllers.auth_controller import get_api_client, login_page, logout_button, redirect_to_login
from controllers.data_controller import sport_overview, teams_frame
from common.constants import RESULTS_PATH, SCHEDULE_PATH, TEAMS_PATH
from common.errors import ApiError, AuthError
from common.ui import render_notices, sidebar_header
from common.utils import configure_logging
from models.schema import coerce_list

st.set_page_config(page_title="Event Admin — Overview", layout="wide")
configure_logging()


def main():
    user = login_page()
    sidebar_header(user=user, show_custom_nav=True)
    logout_button()

    st.title("🏅 Event Admin — Overview")
    st.caption("Use the pages in the sidebar to edit contact info, gallery, results and schedule.")
    render_notices()

    client = get_api_client()
    with st.spinner("Loading overview..."):
        try:
            results = coerce_list(client.get(RESULTS_PATH))
            schedule = coerce_list(client.get(SCHEDULE_PATH))
            df_teams = teams_frame(client.get(TEAMS_PATH))
        except AuthError:
            redirect_to_login()
            return
        except ApiError as exc:
            st.warning(f"Could not load the overview: {exc.message}")
            return

    c1, c2, c3 = st.columns(3)
    c1.metric("Scheduled matches", len(schedule))
    c2.metric("Published results", len(results))
    c3.metric("Teams", len(df_teams))

    st.subheader("Matches per sport")
    df_overview = sport_overview(results, schedule)
    if df_overview.empty:
        st.info("Nothing scheduled or published yet.")
    else:
        st.dataframe(df_overview, use_container_width=True, hide_index=True)

    with st.expander("Team roster"):
        st.dataframe(df_teams, use_container_width=True, hide_index=True)


if __name__ == "__main__":
    main()
