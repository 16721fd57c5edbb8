from __future__ import annotations

from datetime import date

import pandas as pd
import streamlit as st

from coachdesk.components.date_filter import render_date_filter
from coachdesk.components.metrics import Kpi, format_currency, render_kpi_row
from coachdesk.components.narrative import render_page_intro, run_action
from coachdesk.config import AppConfig
from coachdesk.data.models import PAYMENT_MODE_LABELS, PAYMENT_MODES, PAYMENT_STATUSES, Payment, Student
from coachdesk.data.reports import filter_by_date, search_payments
from coachdesk.data.service import DataContext


def _payment_form(key: str, students: list[Student], payment: Payment | None = None) -> dict | None:
    p = payment
    by_id = {s.id: s for s in students}
    with st.form(key, clear_on_submit=payment is None):
        c1, c2 = st.columns(2)
        if p:
            # the student on a recorded payment is fixed; the name is a snapshot
            c1.text_input("Student", value=p.studentName, disabled=True)
            student_id = p.studentId
        else:
            student_id = c1.selectbox(
                "Student *",
                list(by_id),
                format_func=lambda i: by_id[i].name,
                index=None,
                placeholder="Select a student",
            )
        default_amount = float(p.amount) if p else 0.0
        amount = c2.number_input("Amount *", min_value=0.0, step=500.0, value=default_amount)
        status = c1.selectbox(
            "Status",
            PAYMENT_STATUSES,
            index=PAYMENT_STATUSES.index(p.status) if p else 1,
            format_func=str.title,
        )
        mode = c2.selectbox(
            "Payment mode",
            PAYMENT_MODES,
            index=PAYMENT_MODES.index(p.paymentMode) if p else 0,
            format_func=lambda m: PAYMENT_MODE_LABELS[m],
        )
        paid_on = c1.date_input("Payment date", value=date.fromisoformat(p.paymentDate) if p else date.today())
        txn = c2.text_input("Transaction ID", value=(p.transactionId or "") if p else "")
        description = st.text_input("Description", value=(p.description or "") if p else "")
        submitted = st.form_submit_button("Save changes" if p else "Record payment")

    if not submitted:
        return None
    if not student_id:
        st.error("Select a student")
        return None
    if amount <= 0:
        st.error("Amount must be greater than zero")
        return None
    data = {
        "amount": float(amount),
        "status": status,
        "paymentMode": mode,
        "paymentDate": paid_on.isoformat(),
        "transactionId": txn.strip() or None,
        "description": description.strip() or None,
    }
    if not p:
        data["studentId"] = student_id
        data["studentName"] = by_id[student_id].name
    return data


def render(cfg: AppConfig, ctx: DataContext) -> None:
    render_page_intro("Payments", "Fee collections, received and pending.")
    cur = cfg.currency_symbol

    payments = ctx.payments.list()
    students = ctx.students.list()

    received = sum(p.amount for p in payments if p.status == "received")
    pending = sum(p.amount for p in payments if p.status == "pending")
    render_kpi_row(
        [
            Kpi("Received", format_currency(received, cur)),
            Kpi("Pending", format_currency(pending, cur)),
            Kpi("Payments", f"{len(payments)}"),
        ]
    )

    with st.expander("➕ Record payment", expanded=False):
        if not students:
            st.info("Add a student before recording payments.")
        else:
            data = _payment_form("add_payment", students)
            if data:
                run_action(ctx.payments.create, data)

    c1, c2 = st.columns([3, 2])
    term = c1.text_input("Search", placeholder="Student name or transaction ID")
    with c2:
        start, end = render_date_filter("payments")

    shown = filter_by_date(search_payments(payments, term), "paymentDate", start, end)
    shown = sorted(shown, key=lambda p: p.paymentDate, reverse=True)

    st.subheader(f"All payments ({len(shown)})")
    if not shown:
        st.info("No payments found.")
        return

    st.dataframe(
        pd.DataFrame(
            [
                {
                    "Student": p.studentName,
                    "Amount": format_currency(p.amount, cur),
                    "Status": p.status.title(),
                    "Mode": PAYMENT_MODE_LABELS.get(p.paymentMode, p.paymentMode),
                    "Date": p.paymentDate,
                    "Transaction ID": p.transactionId or "",
                    "Description": p.description or "",
                }
                for p in shown
            ]
        ),
        hide_index=True,
        use_container_width=True,
    )

    st.subheader("Edit or delete")
    by_id = {p.id: p for p in shown}
    selected = st.selectbox(
        "Payment",
        list(by_id),
        format_func=lambda i: f"{by_id[i].studentName} · {format_currency(by_id[i].amount, cur)} · {by_id[i].paymentDate}",
    )
    payment = by_id[selected]
    if payment.status == "pending" and st.button("✅ Mark as received", key=f"receive_{payment.id}"):
        run_action(ctx.payments.update, payment.id, {"status": "received"})

    data = _payment_form(f"edit_payment_{payment.id}", students, payment)
    if data:
        changed = {k: v for k, v in data.items() if getattr(payment, k) != v}
        run_action(ctx.payments.update, payment.id, changed)
    if st.button("🗑️ Delete payment", key=f"delete_payment_{payment.id}"):
        run_action(ctx.payments.delete, payment.id)
