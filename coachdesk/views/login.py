from __future__ import annotations

import streamlit as st

from coachdesk.data.settings_store import SettingsStore


def render(store: SettingsStore) -> None:
    _, mid, _ = st.columns([1, 1, 1])
    with mid:
        st.title(store.center_name)
        st.caption("Enter the dashboard password to continue.")
        with st.form("login"):
            password = st.text_input("Password", type="password")
            if st.form_submit_button("Log in", use_container_width=True):
                if store.verify_password(password):
                    st.session_state["authenticated"] = True
                    st.rerun()
                else:
                    st.error("Incorrect password")
