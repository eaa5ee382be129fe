# common/ui.py
from __future__ import annotations
from typing import Callable, List, Optional, Tuple
import pandas as pd
import streamlit as st

from common.constants import ALL_FILTER, SPORTS
from common.utils import match_label, option_index, safe_rerun, selectbox_with_placeholder
from controllers.commit_flow import CommitFlow, CommitKind

NOTICES_KEY = "notices"
_NOTICE_RENDERERS = {"success": st.success, "warning": st.warning, "info": st.info}


def sidebar_header(user: str | None, show_custom_nav: bool = False):
    # Hide the built-in pages nav so only our custom links appear
    st.markdown(
        "<style>[data-testid='stSidebarNav']{display:none !important;}</style>",
        unsafe_allow_html=True,
    )
    with st.sidebar:
        st.markdown("**Signed in as:** " + (user or "—"))

        if show_custom_nav:
            st.divider()
            st.markdown("#### Admin")
            st.page_link("main.py", label="Overview", icon="🏠")
            st.page_link("pages/1_Contact.py", label="Contact", icon="📇")
            st.page_link("pages/2_Gallery.py", label="Gallery", icon="🖼️")
            st.page_link("pages/3_Results.py", label="Results", icon="🏆")
            st.page_link("pages/4_Schedule.py", label="Schedule", icon="📅")


def push_notice(level: str, message: str) -> None:
    """`notify` callback handed to controllers; shown on the next render."""
    st.session_state.setdefault(NOTICES_KEY, []).append((level, message))


def render_notices() -> None:
    notices: List[Tuple[str, str]] = st.session_state.pop(NOTICES_KEY, [])
    for level, message in notices:
        _NOTICE_RENDERERS.get(level, st.error)(message)


def get_page_controller(key: str, factory: Callable):
    """One controller per browser session and page, created and loaded on first use."""
    if key not in st.session_state:
        st.session_state[key] = factory()
    ctrl = st.session_state[key]
    if not ctrl.loaded:
        with st.spinner("Loading..."):
            ctrl.load()
    return ctrl


def _password_form(flow: CommitFlow, key: str) -> None:
    req = flow.pending
    verb = "delete" if req and req.kind is CommitKind.DELETE else "save these changes"
    st.write(f"Enter the admin password to {verb}.")
    if flow.last_error:
        st.error(flow.last_error)
    with st.form(f"{key}_password_form", clear_on_submit=True):
        pwd = st.text_input("Admin password", type="password")
        c1, c2 = st.columns(2)
        ok = c1.form_submit_button("Confirm", type="primary")
        cancel = c2.form_submit_button("Cancel")
    if ok:
        with st.spinner("Saving..."):
            flow.submit(pwd)
        safe_rerun()
    if cancel:
        flow.cancel()
        safe_rerun()


def password_prompt(flow: CommitFlow, key: str) -> None:
    """Show the password modal while a commit is waiting for the admin password."""
    if not flow.awaiting_password:
        return
    dialog = getattr(st, "dialog", None) or getattr(st, "experimental_dialog", None)
    if dialog is not None:
        dialog("Confirm with admin password")(lambda: _password_form(flow, key))()
    else:
        with st.container(border=True):
            _password_form(flow, key)


def new_upload(label: str, key: str, types: Optional[List[str]] = None) -> Optional[Tuple[bytes, str]]:
    """Return (bytes, filename) once per newly selected file, None otherwise."""
    uploaded = st.file_uploader(label, type=types, key=key)
    if uploaded is None:
        return None
    seen = st.session_state.setdefault("_handled_uploads", set())
    marker = (key, getattr(uploaded, "file_id", None) or uploaded.name)
    if marker in seen:
        return None
    seen.add(marker)
    return uploaded.getvalue(), uploaded.name


def edit_text(label: str, current, key: str, setter: Callable, widget=None, **kwargs) -> None:
    """Render an input seeded from the editor state and push changes back through `setter`."""
    widget = widget or st.text_input
    value = widget(label, value=current if current is not None else "", key=key, **kwargs)
    if value != current:
        setter(value)


def edit_choice(label: str, options: List[str], current, key: str, setter: Callable, **kwargs) -> None:
    index = option_index(options, current, default=0 if options else None)
    value = st.selectbox(label, options=options, index=index, key=key, **kwargs)
    if value is not None and value != current:
        setter(value)


def source_type_toggle(current: str, key: str, setter: Callable) -> str:
    """URL / Upload switch used by image and score-sheet fields."""
    labels = {"url": "🔗 URL", "upload": "⬆️ Upload"}
    value = st.radio(
        "Source", options=list(labels), index=1 if current == "upload" else 0,
        format_func=labels.get, horizontal=True, key=key, label_visibility="collapsed",
    )
    if value != current:
        setter(value)
    return value


def edit_date(label: str, current: str, key: str, setter: Callable) -> None:
    """Dates are stored as ISO strings; unparseable values are left alone unless edited."""
    ts = pd.to_datetime(current or None, errors="coerce")
    initial = ts.date() if pd.notnull(ts) else None
    value = st.date_input(label, value=initial, key=key)
    if value != initial:
        setter(value.isoformat() if value else "")


def edit_time(label: str, current: str, key: str, setter: Callable) -> None:
    ts = pd.to_datetime(current or None, format="%H:%M", errors="coerce")
    initial = ts.time() if pd.notnull(ts) else None
    value = st.time_input(label, value=initial, key=key, step=300)
    if value != initial:
        setter(value.strftime("%H:%M") if value else "")


def team_options(names: List[str], *current: str) -> List[str]:
    """Roster names plus any value already on the record that is no longer in the roster."""
    extra = [c for c in current if c and c not in names]
    return extra + list(names)


def record_picker(ctrl, key: str, noun: str = "Match") -> Optional[dict]:
    """Two-step selection: sport filter, then one record from the filtered list."""
    editor = ctrl.editor
    c1, c2 = st.columns([1, 2])
    with c1:
        in_use = {r.get("sport") for r in editor.records if r.get("sport")}
        options = [ALL_FILTER] + [s for s in SPORTS if s in in_use] + sorted(in_use - set(SPORTS))
        value = st.selectbox(
            "1. Filter by Sport", options,
            index=option_index(options, editor.filter_value),
            format_func=lambda s: "All Sports" if s == ALL_FILTER else s,
            key=f"{key}_filter_{editor.filter_value}",
        )
        if value != editor.filter_value:
            ctrl.set_filter(value)
    with c2:
        st.markdown(f"2. Select {noun}")
        visible = editor.visible()
        labels = {r["id"]: match_label(r) for r in visible}
        ids = list(labels)
        picked = selectbox_with_placeholder(
            f"Select a {noun}", ids,
            key=f"{key}_pick_{editor.revision}_{editor.selected_id}",
            default_index=option_index(ids, editor.selected_id, default=None),
            format_func=lambda i: labels.get(i, i),
        )
        if picked and picked != editor.selected_id:
            ctrl.select(picked)
        st.caption("(M) = Men • (W) = Women • (X) = Mixed")
    return editor.selected
