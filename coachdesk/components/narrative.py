from __future__ import annotations

import html

import streamlit as st

from coachdesk.data.service import Notice
from coachdesk.errors import CoachDeskError


_TOAST_ICONS = {
    "success": "✅",
    "offline": "💾",
    "error": "⚠️",
    "not_found": "🔍",
    "info": "ℹ️",
}


def render_page_intro(title: str, subtitle: str) -> None:
    st.title(title)
    st.markdown(f'<div class="page-intro">{html.escape(subtitle)}</div>', unsafe_allow_html=True)


def queue_notice(notice: Notice) -> None:
    """DataContext subscriber: keep notices until the next render (forms call st.rerun)."""
    st.session_state.setdefault("notices", []).append(notice)


def flush_notices() -> None:
    for notice in st.session_state.pop("notices", []):
        st.toast(notice.message, icon=_TOAST_ICONS.get(notice.level))


def run_action(fn, *args, **kwargs) -> bool:
    """
    Run a DataContext write from a form callback.
    On success the page reruns so tables pick up the new collection state;
    on failure the form stays as-is and the error notice is shown right away.
    """
    try:
        fn(*args, **kwargs)
    except CoachDeskError:
        flush_notices()
        return False
    st.rerun()
    return True
