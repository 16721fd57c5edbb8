from __future__ import annotations

import html

import streamlit as st


def render_header(app_name: str, subtitle: str, right_pill: str, online: bool) -> None:
    state = "online" if online else "offline"
    st.markdown(
        f'<div class="panel ledger-bar">'
        f'<div><div class="ledger-name">{html.escape(app_name)}</div>'
        f'<div class="ledger-tagline">{html.escape(subtitle)}</div></div>'
        f'<span class="conn {state}">{html.escape(right_pill)}</span>'
        f"</div>",
        unsafe_allow_html=True,
    )
