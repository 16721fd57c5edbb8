from __future__ import annotations

import pandas as pd
import streamlit as st

from coachdesk.components.metrics import Kpi, bar_chart, format_currency, pie_chart, render_kpi_row
from coachdesk.components.narrative import render_page_intro
from coachdesk.config import AppConfig
from coachdesk.data.models import PAYMENT_MODE_LABELS
from coachdesk.data.reports import dashboard_stats, expense_breakdown, monthly_summary, recent_payments
from coachdesk.data.service import DataContext


def render(cfg: AppConfig, ctx: DataContext) -> None:
    render_page_intro("Dashboard", "Income, expenses and enrolment at a glance.")
    cur = cfg.currency_symbol

    students = ctx.students.list()
    payments = ctx.payments.list()
    expenses = ctx.expenses.list()
    stats = dashboard_stats(students, ctx.courses.list(), payments, expenses)

    render_kpi_row(
        [
            Kpi("Total income", format_currency(stats.total_income, cur), help="Received payments only"),
            Kpi("Total expenses", format_currency(stats.total_expenses, cur)),
            Kpi(
                "Net profit",
                format_currency(stats.net_profit, cur),
                note="Income minus expenses",
                tone="good" if stats.net_profit >= 0 else "bad",
            ),
            Kpi("Pending fees", format_currency(stats.pending_payments, cur)),
        ]
    )
    st.write("")
    render_kpi_row(
        [
            Kpi("Students", f"{stats.total_students}", help=f"{stats.inactive_students} inactive"),
            Kpi("Active students", f"{stats.active_students}"),
            Kpi("New this month", f"{stats.new_students_this_month}"),
            Kpi("Courses", f"{stats.total_courses}"),
        ]
    )
    st.write("")
    render_kpi_row(
        [
            Kpi("Income this month", format_currency(stats.this_month_income, cur)),
            Kpi("Expenses this month", format_currency(stats.this_month_expenses, cur)),
            Kpi("Payments recorded", f"{stats.total_payments_count}", help=f"{stats.received_payments_count} received"),
        ]
    )

    st.divider()

    c1, c2 = st.columns([3, 2])
    with c1:
        monthly = monthly_summary(payments, expenses, months=6, label_format="%b")
        bar_chart(monthly, x="label", y=["income", "expenses"], title="Income vs expenses (last 6 months)", currency=cur)
    with c2:
        breakdown = expense_breakdown(expenses)
        if len(breakdown):
            pie_chart(breakdown, names="label", values="amount", title="Expenses by category")
        else:
            st.info("No expenses recorded yet.")

    st.subheader("Recent payments")
    recent = recent_payments(payments, n=5)
    if recent:
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "Student": p.studentName,
                        "Amount": format_currency(p.amount, cur),
                        "Mode": PAYMENT_MODE_LABELS.get(p.paymentMode, p.paymentMode),
                        "Status": p.status.title(),
                        "Date": p.paymentDate,
                    }
                    for p in recent
                ]
            ),
            hide_index=True,
            use_container_width=True,
        )
    else:
        st.info("No payments recorded yet.")
