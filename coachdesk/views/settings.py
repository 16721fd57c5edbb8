from __future__ import annotations

import streamlit as st

from coachdesk.components.narrative import queue_notice, render_page_intro
from coachdesk.config import AppConfig
from coachdesk.data.service import DataContext, Notice
from coachdesk.data.settings_store import MIN_PASSWORD_LENGTH, SettingsStore
from coachdesk.errors import ValidationError


def render(cfg: AppConfig, ctx: DataContext, store: SettingsStore) -> None:
    render_page_intro("Settings", "Center details, password and backend connection.")

    st.subheader("Center")
    with st.form("center_name"):
        name = st.text_input("Center name", value=store.center_name)
        if st.form_submit_button("Save name"):
            try:
                store.set_center_name(name)
            except ValidationError as e:
                st.error(e.message)
            else:
                queue_notice(Notice("success", "Center name updated successfully"))
                st.rerun()

    st.subheader("Change password")
    with st.form("change_password", clear_on_submit=True):
        old = st.text_input("Current password", type="password")
        new = st.text_input("New password", type="password", help=f"At least {MIN_PASSWORD_LENGTH} characters")
        confirm = st.text_input("Confirm new password", type="password")
        if st.form_submit_button("Change password"):
            if new != confirm:
                st.error("New passwords do not match")
            else:
                try:
                    store.change_password(old, new)
                except ValidationError as e:
                    st.error(e.message)
                else:
                    st.success("Password changed successfully")

    st.subheader("Backend")
    st.code(cfg.api_base_url, language="text")
    st.caption(f"Mode: **{ctx.mode.value}**")
    if not ctx.connected:
        st.caption("Start the API server and press *Refresh data* in the sidebar to reconnect.")
