"""
Authentication helpers for the Streamlit admin console.

The bearer token issued by `/api/login` is the admin session. It lives in
`st.session_state` for the current browser session and in a cookie so a page
reload does not log the admin out.

Key functions:
    - `get_api_client()`: the per-session `ApiClient` bound to the token store.
    - `login_page()`: restore the token from the cookie, or render a login
        form and block the page until it succeeds.
    - `ensure_auth()`: used by the resource pages; sends the user to Home
        when there is no token.
    - `logout_button()`: sidebar button calling the logout endpoint.
    - `redirect_to_login()`: what controllers call after a forced logout.

Implementation notes:
    - The `CookieManager` component can only be created once per key in a
        script run, so cookie writes requested during a run (login, logout)
        are recorded in session_state and applied by `sync_cookie()` on the
        next run, through a single component instance.
    - `force_logout` in session_state stops the next run from logging the
        user straight back in from a cookie that has not been deleted yet.
"""

# Import libraries
from __future__ import annotations
import logging
from datetime import datetime, timedelta
from typing import Optional

import streamlit as st
import extra_streamlit_components as stx

from common.api import ApiClient
from common.constants import API_URL, TOKEN_COOKIE, TOKEN_DAYS
from common.errors import ApiError
from common.session import AdminSession
from common.utils import safe_rerun

logger = logging.getLogger(__name__)

CM_KEY_MAIN    = "admin_cookie_component_main"
CLIENT_KEY     = "api_client"
PENDING_COOKIE = "pending_token_cookie"

# Page-level state cleared on logout (controllers, notices, widget picks)
SESSION_KEYS = ("username", "notices", "contact_ctrl", "gallery_ctrl", "results_ctrl", "schedule_ctrl")


class SessionStateTokenStore:
    """Token store over `st.session_state`; cookie writes are deferred to `sync_cookie()`."""

    def get(self, key: str) -> Optional[str]:
        return st.session_state.get(key)

    def set(self, key: str, value: str) -> None:
        st.session_state[key] = value
        st.session_state[PENDING_COOKIE] = value
        st.session_state.pop("force_logout", None)

    def delete(self, key: str) -> None:
        st.session_state.pop(key, None)
        st.session_state.pop(PENDING_COOKIE, None)
        st.session_state["force_logout"] = True


def get_api_client() -> ApiClient:
    if CLIENT_KEY not in st.session_state:
        st.session_state[CLIENT_KEY] = ApiClient(
            base_url=API_URL,
            session=AdminSession(SessionStateTokenStore(), key=TOKEN_COOKIE),
        )
    return st.session_state[CLIENT_KEY]


def sync_cookie() -> None:
    """Apply pending cookie writes and restore the token from the cookie on a fresh session."""
    cm = stx.CookieManager(key=CM_KEY_MAIN)
    client = get_api_client()

    if st.session_state.get("force_logout"):
        try:
            cm.delete(TOKEN_COOKIE)
        except KeyError:
            # Already gone on the browser side
            pass
        return

    pending = st.session_state.pop(PENDING_COOKIE, None)
    if pending:
        cm.set(TOKEN_COOKIE, pending, expires_at=datetime.now() + timedelta(days=TOKEN_DAYS))
        return

    if not client.session.authenticated:
        token = (cm.get_all() or {}).get(TOKEN_COOKIE)
        if token:
            # Restore without scheduling another cookie write
            st.session_state[TOKEN_COOKIE] = token


def login_page() -> Optional[str]:
    """
    Returns the username when authenticated; otherwise renders the login form
    and stops the script.
    """
    sync_cookie()
    client = get_api_client()
    if client.session.authenticated:
        return st.session_state.get("username", "admin")

    st.markdown("""
        <style>
          [data-testid="stSidebar"] { display: none; }
          .block-container { padding-top: 10vh; max-width: 560px; }
        </style>
    """, unsafe_allow_html=True)

    st.markdown("## Admin Login")
    with st.form("login_form", clear_on_submit=False):
        user = st.text_input("Username")
        pwd  = st.text_input("Password", type="password")
        ok = st.form_submit_button("Login")

    if ok:
        try:
            client.login(user, pwd)
        except ApiError as exc:
            logger.info("Login failed for %r: %s", user, exc)
            st.error(getattr(exc, "server_message", "") or "Invalid username or password.")
        else:
            st.session_state["username"] = user
            safe_rerun()
    st.stop()  # block the rest of the app if not authenticated


def ensure_auth() -> None:
    sync_cookie()
    if not get_api_client().session.authenticated:
        try:
            st.switch_page("main.py")
        except Exception:
            st.info("Please sign in on **Home** first.")
            st.stop()


def clear_page_state() -> None:
    for k in SESSION_KEYS:
        st.session_state.pop(k, None)


def redirect_to_login() -> None:
    """Called after the client has already been logged out."""
    clear_page_state()
    try:
        st.switch_page("main.py")
    except Exception:
        safe_rerun()


def logout_button() -> None:
    with st.sidebar:
        if st.button("Logout", key="logout_btn"):
            get_api_client().logout()
            clear_page_state()
            safe_rerun()
