from __future__ import annotations

import streamlit as st

from coachdesk.config import THEME


APP_TITLE = "Coaching Center Ledger"

# CSS custom property -> THEME key
_CSS_VARS = {
    "accent": "accent_primary",
    "accent-hover": "accent_secondary",
    "ink": "navy_900",
    "ink-soft": "navy_800",
    "page": "bg_primary",
    "surface": "bg_secondary",
    "card": "bg_card",
    "line": "border_color",
    "text": "text_primary",
    "muted": "text_secondary",
    "shadow": "shadow",
    "good": "success",
    "warn": "warning",
    "bad": "danger",
}

_RULES = """
#MainMenu, footer { visibility: hidden; }

html, body, [data-testid="stAppViewContainer"]{
  background: var(--page) !important;
  color: var(--text) !important;
}
[data-testid="stSidebar"]{
  background: var(--surface) !important;
  border-right: 1px solid var(--line) !important;
}
.block-container{ padding: 0.75rem 1.5rem 2rem 1.5rem !important; }

.panel{
  background: var(--card);
  border: 1px solid var(--line);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
}

/* Top bar: center name + connection state */
.ledger-bar{
  display: flex;
  justify-content: space-between;
  align-items: center;
  padding: 12px 16px;
  margin-bottom: 16px;
}
.ledger-name{ font-size: 21px; font-weight: 700; color: var(--ink); }
.ledger-tagline{ font-size: 13px; color: var(--muted); }
.conn{
  border: 1px solid var(--line);
  border-radius: 999px;
  padding: 5px 12px;
  font-size: 13px;
  font-weight: 600;
  color: var(--ink-soft);
  white-space: nowrap;
}
.conn::before{
  content: "";
  display: inline-block;
  width: 8px;
  height: 8px;
  margin-right: 6px;
  border-radius: 50%;
}
.conn.online::before{ background: var(--good); }
.conn.offline::before{ background: var(--warn); }

/* KPI tiles */
.kpi{ padding: 12px 16px; min-height: 96px; }
.kpi-label{ font-size: 13px; color: var(--muted); text-transform: uppercase; letter-spacing: 0.02em; }
.kpi-value{ font-size: 25px; font-weight: 700; margin-top: 4px; }
.kpi-note{ font-size: 13px; margin-top: 4px; color: var(--muted); }
.kpi.good .kpi-value{ color: var(--good); }
.kpi.bad .kpi-value{ color: var(--bad); }

div.stButton > button, div.stFormSubmitButton > button, div.stDownloadButton > button{
  border-radius: var(--radius) !important;
  font-weight: 600 !important;
}
div[data-testid="stPlotlyChart"], div[data-testid="stDataFrame"]{
  background: var(--card);
  border: 1px solid var(--line);
  border-radius: var(--radius);
  padding: 6px 8px;
}

.page-intro{ color: var(--muted); margin: -6px 0 14px 0; }
"""


def theme_css() -> str:
    """Stylesheet for the whole app, with colors read from THEME."""
    props = [f"--{name}: {THEME[key]};" for name, key in _CSS_VARS.items()]
    props.append(f"--radius: {int(THEME['radius_px'])}px;")
    return "<style>\n:root{\n  " + "\n  ".join(props) + "\n}\n" + _RULES + "</style>"


def apply_theme() -> None:
    st.set_page_config(
        page_title=APP_TITLE,
        page_icon="📒",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    st.markdown(theme_css(), unsafe_allow_html=True)
