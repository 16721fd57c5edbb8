"""
Aggregations behind the Dashboard and Reports pages.

Inputs are canonical records (lists of dataclasses) so these work the same
whether the session is connected or running on sample data.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

import pandas as pd

from coachdesk.data.models import (
    EXPENSE_CATEGORY_LABELS,
    PAYMENT_MODE_LABELS,
    Course,
    Expense,
    Payment,
    Student,
)


DATE_PRESETS = ["all", "this-month", "last-month", "last-3-months", "custom"]
DATE_PRESET_LABELS = {
    "all": "All time",
    "this-month": "This month",
    "last-month": "Last month",
    "last-3-months": "Last 3 months",
    "custom": "Custom range",
}
REPORT_PERIODS = {"3months": 3, "6months": 6, "12months": 12}


@dataclass(frozen=True)
class DashboardStats:
    total_income: float
    total_expenses: float
    pending_payments: float
    net_profit: float
    active_students: int
    inactive_students: int
    total_students: int
    new_students_this_month: int
    this_month_income: float
    this_month_expenses: float
    total_payments_count: int
    received_payments_count: int
    total_courses: int


def to_frame(records: Iterable, columns: Sequence[str]) -> pd.DataFrame:
    rows = [asdict(r) for r in records]
    if not rows:
        return pd.DataFrame(columns=list(columns))
    return pd.DataFrame(rows)


def _dates(s: pd.Series) -> pd.Series:
    return pd.to_datetime(s, errors="coerce")


def _month_start(d: date) -> date:
    return d.replace(day=1)


def _month_end(d: date) -> date:
    nxt = (d.replace(day=28) + timedelta(days=4)).replace(day=1)
    return nxt - timedelta(days=1)


def _shift_months(d: date, months: int) -> date:
    idx = d.year * 12 + (d.month - 1) + months
    year, month = divmod(idx, 12)
    return date(year, month + 1, 1)


def dashboard_stats(
    students: list[Student],
    courses: list[Course],
    payments: list[Payment],
    expenses: list[Expense],
    today: Optional[date] = None,
) -> DashboardStats:
    today = today or date.today()
    month_start = pd.Timestamp(_month_start(today))

    st_df = to_frame(students, ["status", "joinDate"])
    pay_df = to_frame(payments, ["status", "amount", "paymentDate"])
    exp_df = to_frame(expenses, ["amount", "expenseDate"])

    received = pay_df[pay_df["status"] == "received"]
    pending = pay_df[pay_df["status"] == "pending"]

    total_income = float(received["amount"].sum())
    total_expenses = float(exp_df["amount"].sum())

    return DashboardStats(
        total_income=total_income,
        total_expenses=total_expenses,
        pending_payments=float(pending["amount"].sum()),
        net_profit=total_income - total_expenses,
        active_students=int((st_df["status"] == "active").sum()),
        inactive_students=int((st_df["status"] == "inactive").sum()),
        total_students=len(st_df),
        new_students_this_month=int((_dates(st_df["joinDate"]) >= month_start).sum()),
        this_month_income=float(received.loc[_dates(received["paymentDate"]) >= month_start, "amount"].sum()),
        this_month_expenses=float(exp_df.loc[_dates(exp_df["expenseDate"]) >= month_start, "amount"].sum()),
        total_payments_count=len(pay_df),
        received_payments_count=len(received),
        total_courses=len(courses),
    )


def monthly_summary(
    payments: list[Payment],
    expenses: list[Expense],
    months: int = 6,
    today: Optional[date] = None,
    label_format: str = "%b %y",
) -> pd.DataFrame:
    """Income (received only), expenses and profit for the last `months` calendar months, oldest first."""
    today = today or date.today()
    periods = pd.period_range(end=pd.Period(pd.Timestamp(today), freq="M"), periods=months, freq="M")

    pay_df = to_frame(payments, ["status", "amount", "paymentDate"])
    exp_df = to_frame(expenses, ["amount", "expenseDate"])

    received = pay_df[pay_df["status"] == "received"]
    income = received.groupby(_dates(received["paymentDate"]).dt.to_period("M"))["amount"].sum()
    spent = exp_df.groupby(_dates(exp_df["expenseDate"]).dt.to_period("M"))["amount"].sum()

    out = pd.DataFrame({"month": periods})
    out["label"] = [p.to_timestamp().strftime(label_format) for p in periods]
    out["income"] = [float(income.get(p, 0.0)) for p in periods]
    out["expenses"] = [float(spent.get(p, 0.0)) for p in periods]
    out["profit"] = out["income"] - out["expenses"]
    return out


def expense_breakdown(expenses: list[Expense]) -> pd.DataFrame:
    df = to_frame(expenses, ["category", "amount"])
    if df.empty:
        return pd.DataFrame(columns=["category", "label", "amount"])
    out = df.groupby("category", as_index=False)["amount"].sum().sort_values("amount", ascending=False)
    out["label"] = out["category"].map(lambda c: EXPENSE_CATEGORY_LABELS.get(c, c))
    return out[["category", "label", "amount"]].reset_index(drop=True)


def payment_mode_breakdown(payments: list[Payment]) -> pd.DataFrame:
    df = to_frame(payments, ["status", "paymentMode", "amount"])
    df = df[df["status"] == "received"]
    if df.empty:
        return pd.DataFrame(columns=["paymentMode", "label", "amount"])
    out = df.groupby("paymentMode", as_index=False)["amount"].sum().sort_values("amount", ascending=False)
    out["label"] = out["paymentMode"].map(lambda m: PAYMENT_MODE_LABELS.get(m, m))
    return out[["paymentMode", "label", "amount"]].reset_index(drop=True)


def recent_payments(payments: list[Payment], n: int = 5) -> list[Payment]:
    return sorted(payments, key=lambda p: p.paymentDate, reverse=True)[:n]


def date_range(
    preset: str,
    today: Optional[date] = None,
    custom: Optional[tuple[Optional[date], Optional[date]]] = None,
) -> tuple[Optional[date], Optional[date]]:
    """Resolve a date-filter preset to an inclusive (start, end); (None, None) means unfiltered."""
    today = today or date.today()
    if preset == "this-month":
        return _month_start(today), _month_end(today)
    if preset == "last-month":
        last = _shift_months(today, -1)
        return last, _month_end(last)
    if preset == "last-3-months":
        return _shift_months(today, -2), _month_end(today)
    if preset == "custom" and custom and custom[0] and custom[1]:
        return custom[0], custom[1]
    return None, None


def filter_by_date(records: list, field: str, start: Optional[date], end: Optional[date]) -> list:
    if start is None or end is None:
        return list(records)
    lo, hi = start.isoformat(), end.isoformat()
    # ISO calendar dates compare correctly as strings
    return [r for r in records if lo <= getattr(r, field)[:10] <= hi]


def _contains(value: Optional[str], term: str) -> bool:
    return term in (value or "").lower()


def search_students(students: list[Student], term: str) -> list[Student]:
    t = (term or "").strip().lower()
    if not t:
        return list(students)
    return [s for s in students if _contains(s.name, t) or _contains(s.email, t) or _contains(s.course, t)]


def search_payments(payments: list[Payment], term: str) -> list[Payment]:
    t = (term or "").strip().lower()
    if not t:
        return list(payments)
    return [p for p in payments if _contains(p.studentName, t) or _contains(p.transactionId, t)]


def search_expenses(expenses: list[Expense], term: str) -> list[Expense]:
    t = (term or "").strip().lower()
    if not t:
        return list(expenses)
    return [e for e in expenses if _contains(e.description, t)]
