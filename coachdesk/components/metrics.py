from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from coachdesk.config import THEME


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    note: Optional[str] = None
    tone: Optional[str] = None  # "good" | "bad" colors the value
    help: Optional[str] = None


def format_currency(value: float, symbol: str = "₹") -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.0f}"


def render_kpi_row(kpis: list[Kpi]) -> None:
    for col, k in zip(st.columns(len(kpis)), kpis):
        note = f'<div class="kpi-note">{html.escape(k.note)}</div>' if k.note else ""
        col.markdown(
            f'<div class="panel kpi {k.tone or ""}" title="{html.escape(k.help or "")}">'
            f'<div class="kpi-label">{html.escape(k.label)}</div>'
            f'<div class="kpi-value">{html.escape(k.value)}</div>{note}</div>',
            unsafe_allow_html=True,
        )


COLORWAY = [
    THEME["accent_primary"],
    THEME["success"],
    THEME["warning"],
    "#8B5CF6",
    THEME["danger"],
    "#0EA5E9",
]


def apply_plotly_theme(fig: go.Figure, x_title: str, y_title: str) -> go.Figure:
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        font=dict(color=THEME["text_primary"]),
        paper_bgcolor=THEME["bg_card"],
        plot_bgcolor=THEME["bg_card"],
        colorway=COLORWAY,
        legend={"orientation": "h", "yanchor": "bottom", "y": 1.02, "xanchor": "left", "x": 0},
        title_font={"color": THEME["navy_900"], "size": 16},
    )
    fig.update_xaxes(title_text=x_title, gridcolor=THEME["grid"], zeroline=False, linecolor=THEME["border_color"])
    fig.update_yaxes(title_text=y_title, gridcolor=THEME["grid"], zeroline=False, linecolor=THEME["border_color"])
    return fig


def line_chart(df: pd.DataFrame, x: str, y: list[str], title: str = "", currency: str = "₹") -> None:
    long = df.melt(id_vars=[x], value_vars=y, var_name="series", value_name="amount")
    fig = px.line(long, x=x, y="amount", color="series", title=title, markers=True)
    fig = apply_plotly_theme(fig, x_title="", y_title="")
    fig.update_traces(line=dict(width=2))
    fig.update_yaxes(tickprefix=currency, separatethousands=True)
    st.plotly_chart(fig, use_container_width=True)


def bar_chart(df: pd.DataFrame, x: str, y: list[str], title: str = "", currency: str = "₹") -> None:
    long = df.melt(id_vars=[x], value_vars=y, var_name="series", value_name="amount")
    fig = px.bar(long, x=x, y="amount", color="series", barmode="group", title=title)
    fig = apply_plotly_theme(fig, x_title="", y_title="")
    fig.update_yaxes(tickprefix=currency, separatethousands=True)
    st.plotly_chart(fig, use_container_width=True)


def pie_chart(df: pd.DataFrame, names: str, values: str, title: str = "") -> None:
    fig = px.pie(df, names=names, values=values, title=title, hole=0.45, color_discrete_sequence=COLORWAY)
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        paper_bgcolor=THEME["bg_card"],
        title_font={"color": THEME["navy_900"], "size": 16},
    )
    st.plotly_chart(fig, use_container_width=True)
