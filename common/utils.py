"""
Small helpers shared by the pages and controllers.

Includes logging setup, a rerun helper that works across Streamlit versions,
the `selectbox_with_placeholder` widget used for record pickers, URL
checking for link fields and the labels shown in match selectors.
"""

# Import libraries
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlparse

import pandas as pd
import streamlit as st

from .constants import LOG_LEVEL

_LOGGING_CONFIGURED = False


def configure_logging(level: str = LOG_LEVEL) -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _LOGGING_CONFIGURED = True


def safe_rerun() -> None:
    if hasattr(st, "rerun"): st.rerun()
    elif hasattr(st, "experimental_rerun"): st.experimental_rerun()
    else: st.stop()


def is_valid_url(url: Optional[str]) -> bool:
    """Empty is acceptable (the field is optional); otherwise require http(s) with a host."""
    if not url or not url.strip():
        return True
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def option_index(options: Sequence[str], value: Any, default: Optional[int] = 0) -> Optional[int]:
    try:
        return list(options).index(value)
    except ValueError:
        return default


def short_date(value: str) -> str:
    ts = pd.to_datetime(value, errors="coerce")
    return ts.strftime("%b %d") if pd.notnull(ts) else ""


def match_label(record: Dict[str, Any]) -> str:
    cat = {"Women": "W", "Men": "M"}.get(record.get("category"), "X")
    label = f'{record.get("teamA") or "?"} vs {record.get("teamB") or "?"} ({cat})'
    day = short_date(record.get("date") or "")
    return f"{label} • {day}" if day else label


def selectbox_with_placeholder(
    label: str,
    options: List[str],
    key: Optional[str] = None,
    default_index: Optional[int] = None,
    format_func=str,
):
    """
    A selectbox that can start empty (placeholder) or preselect an item (default_index).
    - Uses a hidden label to avoid duplicate text under the title.
    - Works on older Streamlit as well.
    """
    try:
        return st.selectbox(
            label,
            options=options,
            index=default_index,            # None -> placeholder shown; int -> preselect
            placeholder=label,
            label_visibility="collapsed",
            format_func=format_func,
            key=key,
        )
    except TypeError:
        # Older Streamlit versions do not accept `placeholder`; fall back to a
        # synthetic first option and return None when it is chosen.
        if default_index is None:
            placeholder = f"— {label} —"
            choice = st.selectbox(
                " ", options=[placeholder] + options, index=0, key=key,
                format_func=lambda o: o if o == placeholder else format_func(o),
            )
            return None if choice == placeholder else choice
        return st.selectbox(" ", options=options, index=default_index, key=key, format_func=format_func)
