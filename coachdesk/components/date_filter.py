from __future__ import annotations

from datetime import date
from typing import Optional

import streamlit as st

from coachdesk.data.reports import DATE_PRESET_LABELS, DATE_PRESETS, date_range


def render_date_filter(key: str) -> tuple[Optional[date], Optional[date]]:
    preset = st.selectbox(
        "Period",
        DATE_PRESETS,
        format_func=lambda p: DATE_PRESET_LABELS[p],
        key=f"{key}_preset",
    )
    custom = None
    if preset == "custom":
        c1, c2 = st.columns(2)
        start = c1.date_input("From", value=None, key=f"{key}_from")
        end = c2.date_input("To", value=None, key=f"{key}_to")
        custom = (start, end)
    return date_range(preset, custom=custom)
