"""
Routing only.

All view logic lives in coachdesk/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import os
import sys

# Make the repo importable when running without an install:
#   streamlit run coachdesk/app.py
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import streamlit as st  # noqa: E402

from coachdesk.components.header import render_header  # noqa: E402
from coachdesk.components.narrative import flush_notices, queue_notice  # noqa: E402
from coachdesk.components.sidebar import render_sidebar  # noqa: E402
from coachdesk.components.styles import APP_TITLE, apply_theme  # noqa: E402
from coachdesk.config import AppConfig, get_config  # noqa: E402
from coachdesk.data.service import DataContext  # noqa: E402
from coachdesk.data.settings_store import SettingsStore  # noqa: E402
from coachdesk.log import setup_logging  # noqa: E402

from coachdesk.views import courses, dashboard, expenses, login, payments, reports, settings, students  # noqa: E402


VIEWS = {
    "dashboard": dashboard.render,
    "students": students.render,
    "courses": courses.render,
    "payments": payments.render,
    "expenses": expenses.render,
    "reports": reports.render,
}


def _data_context(cfg: AppConfig) -> DataContext:
    """One DataContext per browser session; probe + load happens on first use."""
    ctx = st.session_state.get("data_ctx")
    if ctx is None:
        ctx = DataContext(cfg, notifier=queue_notice)
        with st.spinner("Connecting to backend..."):
            ctx.load()
        st.session_state["data_ctx"] = ctx
    return ctx


def main() -> None:
    apply_theme()
    cfg = get_config()
    setup_logging(cfg.log_level)
    store = SettingsStore(cfg.settings_file)

    if not st.session_state.get("authenticated"):
        login.render(store)
        return

    ctx = _data_context(cfg)
    state = render_sidebar(ctx, store.center_name)

    if state.logout:
        st.session_state.pop("authenticated", None)
        st.rerun()
    if state.refresh:
        with st.spinner("Refreshing..."):
            ctx.refresh()

    render_header(
        app_name=store.center_name,
        subtitle=APP_TITLE,
        right_pill="API connected" if ctx.connected else "Offline (sample data)",
        online=ctx.connected,
    )
    flush_notices()

    # Routing only
    if state.view == "settings":
        settings.render(cfg, ctx, store)
    elif state.view in VIEWS:
        VIEWS[state.view](cfg, ctx)
    else:
        st.error("Unknown view")


if __name__ == "__main__":
    main()
