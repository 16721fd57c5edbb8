from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from coachdesk.data.service import DataContext


@dataclass(frozen=True)
class SidebarState:
    view: str
    refresh: bool
    logout: bool


NAV_ITEMS = [
    ("📊 Dashboard", "dashboard"),
    ("🎓 Students", "students"),
    ("📚 Courses", "courses"),
    ("💳 Payments", "payments"),
    ("🧾 Expenses", "expenses"),
    ("📈 Reports", "reports"),
    ("⚙️ Settings", "settings"),
]


def render_sidebar(ctx: DataContext, center_name: str) -> SidebarState:
    with st.sidebar:
        st.markdown(f"### 🏫 {center_name}")
        st.caption("Students, fees and expenses")

        labels = [l for l, _ in NAV_ITEMS]
        default_label = st.session_state.get("nav_label", labels[0])
        idx = labels.index(default_label) if default_label in labels else 0

        label = st.radio(
            "Nav",
            labels,
            index=idx,
            label_visibility="collapsed",
        )
        st.session_state["nav_label"] = label
        view = dict(NAV_ITEMS)[label]

        st.divider()
        if ctx.connected:
            st.success("Connected to backend API", icon="🟢")
        else:
            st.warning("Offline mode: sample data, changes stay in this session", icon="🟠")
        refresh = st.button("🔄 Refresh data", use_container_width=True)
        logout = st.button("Log out", use_container_width=True)

    return SidebarState(view=view, refresh=refresh, logout=logout)
