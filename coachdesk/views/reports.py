from __future__ import annotations

import streamlit as st

from coachdesk.components.metrics import Kpi, bar_chart, format_currency, line_chart, pie_chart, render_kpi_row
from coachdesk.components.narrative import render_page_intro
from coachdesk.config import AppConfig
from coachdesk.data.reports import (
    REPORT_PERIODS,
    dashboard_stats,
    expense_breakdown,
    monthly_summary,
    payment_mode_breakdown,
)
from coachdesk.data.service import DataContext


_PERIOD_LABELS = {"3months": "Last 3 months", "6months": "Last 6 months", "12months": "Last 12 months"}


def render(cfg: AppConfig, ctx: DataContext) -> None:
    render_page_intro("Reports", "Financial summaries and analytics.")
    cur = cfg.currency_symbol

    period = st.selectbox("Period", list(REPORT_PERIODS), index=1, format_func=lambda p: _PERIOD_LABELS[p])

    payments = ctx.payments.list()
    expenses = ctx.expenses.list()
    totals = dashboard_stats([], [], payments, expenses)

    render_kpi_row(
        [
            Kpi("Total income", format_currency(totals.total_income, cur)),
            Kpi("Total expenses", format_currency(totals.total_expenses, cur)),
            Kpi("Net profit", format_currency(totals.net_profit, cur)),
            Kpi("Pending fees", format_currency(totals.pending_payments, cur)),
        ]
    )

    monthly = monthly_summary(payments, expenses, months=REPORT_PERIODS[period])
    st.subheader("Monthly income vs expenses")
    bar_chart(monthly, x="label", y=["income", "expenses"], currency=cur)

    st.subheader("Profit trend")
    line_chart(monthly, x="label", y=["profit"], currency=cur)

    c1, c2 = st.columns(2)
    with c1:
        breakdown = expense_breakdown(expenses)
        if len(breakdown):
            pie_chart(breakdown, names="label", values="amount", title="Expenses by category")
        else:
            st.info("No expenses recorded yet.")
    with c2:
        modes = payment_mode_breakdown(payments)
        if len(modes):
            pie_chart(modes, names="label", values="amount", title="Income by payment mode")
        else:
            st.info("No received payments yet.")

    with st.expander("Show monthly figures"):
        table = monthly[["label", "income", "expenses", "profit"]].rename(
            columns={"label": "Month", "income": "Income", "expenses": "Expenses", "profit": "Profit"}
        )
        st.dataframe(table, hide_index=True, use_container_width=True)
        st.download_button(
            "Download CSV",
            table.to_csv(index=False).encode("utf-8"),
            file_name=f"monthly_report_{period}.csv",
            mime="text/csv",
        )
