from __future__ import annotations

from datetime import date

import pandas as pd
import streamlit as st

from coachdesk.components.date_filter import render_date_filter
from coachdesk.components.metrics import Kpi, format_currency, render_kpi_row
from coachdesk.components.narrative import render_page_intro, run_action
from coachdesk.config import AppConfig
from coachdesk.data.models import (
    EXPENSE_CATEGORIES,
    EXPENSE_CATEGORY_LABELS,
    PAYMENT_MODE_LABELS,
    PAYMENT_MODES,
    Expense,
)
from coachdesk.data.reports import filter_by_date, search_expenses
from coachdesk.data.service import DataContext


def _expense_form(key: str, expense: Expense | None = None) -> dict | None:
    e = expense
    with st.form(key, clear_on_submit=expense is None):
        c1, c2 = st.columns(2)
        category = c1.selectbox(
            "Category",
            EXPENSE_CATEGORIES,
            index=EXPENSE_CATEGORIES.index(e.category) if e else 0,
            format_func=lambda c: EXPENSE_CATEGORY_LABELS[c],
        )
        amount = c2.number_input("Amount *", min_value=0.0, step=500.0, value=float(e.amount) if e else 0.0)
        description = c1.text_input("Description *", value=e.description if e else "")
        mode = c2.selectbox(
            "Payment mode",
            PAYMENT_MODES,
            index=PAYMENT_MODES.index(e.paymentMode) if e else 0,
            format_func=lambda m: PAYMENT_MODE_LABELS[m],
        )
        spent_on = c1.date_input("Expense date", value=date.fromisoformat(e.expenseDate) if e else date.today())
        submitted = st.form_submit_button("Save changes" if e else "Add expense")

    if not submitted:
        return None
    if not description.strip():
        st.error("Description is required")
        return None
    if amount <= 0:
        st.error("Amount must be greater than zero")
        return None
    return {
        "category": category,
        "amount": float(amount),
        "description": description.strip(),
        "paymentMode": mode,
        "expenseDate": spent_on.isoformat(),
    }


def render(cfg: AppConfig, ctx: DataContext) -> None:
    render_page_intro("Expenses", "Rent, salaries and everything else the center spends.")
    cur = cfg.currency_symbol

    with st.expander("➕ Add expense", expanded=False):
        data = _expense_form("add_expense")
        if data:
            run_action(ctx.expenses.create, data)

    expenses = ctx.expenses.list()
    c1, c2, c3 = st.columns([2, 1, 2])
    term = c1.text_input("Search", placeholder="Description")
    category = c2.selectbox(
        "Category",
        ["all"] + EXPENSE_CATEGORIES,
        format_func=lambda c: "All" if c == "all" else EXPENSE_CATEGORY_LABELS[c],
    )
    with c3:
        start, end = render_date_filter("expenses")

    shown = filter_by_date(search_expenses(expenses, term), "expenseDate", start, end)
    if category != "all":
        shown = [e for e in shown if e.category == category]
    shown = sorted(shown, key=lambda e: e.expenseDate, reverse=True)

    render_kpi_row(
        [
            Kpi("Total (filtered)", format_currency(sum(e.amount for e in shown), cur)),
            Kpi("Entries", f"{len(shown)}"),
        ]
    )

    st.subheader(f"All expenses ({len(shown)})")
    if not shown:
        st.info("No expenses found.")
        return

    st.dataframe(
        pd.DataFrame(
            [
                {
                    "Category": EXPENSE_CATEGORY_LABELS.get(e.category, e.category),
                    "Description": e.description,
                    "Amount": format_currency(e.amount, cur),
                    "Mode": PAYMENT_MODE_LABELS.get(e.paymentMode, e.paymentMode),
                    "Date": e.expenseDate,
                }
                for e in shown
            ]
        ),
        hide_index=True,
        use_container_width=True,
    )

    st.subheader("Edit or delete")
    by_id = {e.id: e for e in shown}
    selected = st.selectbox(
        "Expense",
        list(by_id),
        format_func=lambda i: f"{by_id[i].description} · {format_currency(by_id[i].amount, cur)} · {by_id[i].expenseDate}",
    )
    expense = by_id[selected]
    data = _expense_form(f"edit_expense_{expense.id}", expense)
    if data:
        changed = {k: v for k, v in data.items() if getattr(expense, k) != v}
        run_action(ctx.expenses.update, expense.id, changed)
    if st.button("🗑️ Delete expense", key=f"delete_expense_{expense.id}"):
        run_action(ctx.expenses.delete, expense.id)
