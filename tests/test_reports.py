from __future__ import annotations

from datetime import date

from coachdesk.data import reports, sample_data
from coachdesk.data.models import Expense, Payment, Student

TODAY = date(2026, 10, 19)


def _payment(pid, amount, status, when, mode="cash", name="Rahul"):
    return Payment(
        id=pid,
        studentId="s1",
        studentName=name,
        amount=amount,
        status=status,
        paymentMode=mode,
        paymentDate=when,
        transactionId=None,
        description=None,
    )


def _expense(eid, amount, category, when):
    return Expense(id=eid, category=category, amount=amount, description=f"{category} bill", paymentMode="cash", expenseDate=when)


PAYMENTS = [
    _payment("p1", 5000, "received", "2026-10-02", mode="upi"),
    _payment("p2", 3000, "received", "2026-09-15"),
    _payment("p3", 4500, "pending", "2026-10-10", name="Priya"),
    _payment("p4", 1000, "received", "2026-05-01", mode="upi"),
]

EXPENSES = [
    _expense("e1", 15000, "rent", "2026-10-01"),
    _expense("e2", 2000, "utilities", "2026-09-05"),
    _expense("e3", 500, "supplies", "2026-10-12"),
]

STUDENTS = [
    Student(id="s1", name="Rahul", email="r@x.com", phone="", course="Physics", batch="Morning", joinDate="2026-10-03"),
    Student(id="s2", name="Priya", email="p@x.com", phone="", course="Biology", batch="Evening", joinDate="2026-01-01", status="inactive"),
]


def test_dashboard_stats():
    s = reports.dashboard_stats(STUDENTS, sample_data.sample_courses(), PAYMENTS, EXPENSES, today=TODAY)
    assert s.total_income == 9000
    assert s.total_expenses == 17500
    assert s.pending_payments == 4500
    assert s.net_profit == -8500
    assert s.active_students == 1
    assert s.inactive_students == 1
    assert s.total_students == 2
    assert s.new_students_this_month == 1
    assert s.this_month_income == 5000
    assert s.this_month_expenses == 15500
    assert s.received_payments_count == 3
    assert s.total_payments_count == 4
    assert s.total_courses == 4


def test_dashboard_stats_with_no_data():
    s = reports.dashboard_stats([], [], [], [], today=TODAY)
    assert s.total_income == 0
    assert s.net_profit == 0
    assert s.total_students == 0


def test_monthly_summary_counts_received_only():
    df = reports.monthly_summary(PAYMENTS, EXPENSES, months=3, today=TODAY)
    assert list(df["label"]) == ["Aug 26", "Sep 26", "Oct 26"]
    assert list(df["income"]) == [0.0, 3000.0, 5000.0]
    assert list(df["expenses"]) == [0.0, 2000.0, 15500.0]
    assert list(df["profit"]) == [0.0, 1000.0, -10500.0]


def test_monthly_summary_window():
    assert len(reports.monthly_summary(PAYMENTS, EXPENSES, months=12, today=TODAY)) == 12
    assert reports.monthly_summary([], [], months=6, today=TODAY)["income"].sum() == 0


def test_expense_breakdown_sorted_by_amount():
    df = reports.expense_breakdown(EXPENSES)
    assert list(df["category"]) == ["rent", "utilities", "supplies"]
    assert df.iloc[0]["label"] == "Rent"
    assert reports.expense_breakdown([]).empty


def test_payment_mode_breakdown_ignores_pending():
    df = reports.payment_mode_breakdown(PAYMENTS)
    assert dict(zip(df["paymentMode"], df["amount"])) == {"upi": 6000, "cash": 3000}


def test_recent_payments():
    assert [p.id for p in reports.recent_payments(PAYMENTS, n=2)] == ["p3", "p1"]


def test_date_range_presets():
    assert reports.date_range("all", TODAY) == (None, None)
    assert reports.date_range("this-month", TODAY) == (date(2026, 10, 1), date(2026, 10, 31))
    assert reports.date_range("last-month", TODAY) == (date(2026, 9, 1), date(2026, 9, 30))
    assert reports.date_range("last-3-months", TODAY) == (date(2026, 8, 1), date(2026, 10, 31))
    assert reports.date_range("last-month", date(2026, 1, 5)) == (date(2025, 12, 1), date(2025, 12, 31))
    assert reports.date_range("custom", TODAY, (date(2026, 9, 1), date(2026, 9, 20))) == (date(2026, 9, 1), date(2026, 9, 20))
    assert reports.date_range("custom", TODAY, (date(2026, 9, 1), None)) == (None, None)


def test_filter_by_date_is_inclusive():
    start, end = reports.date_range("last-month", TODAY)
    assert [p.id for p in reports.filter_by_date(PAYMENTS, "paymentDate", start, end)] == ["p2"]
    assert len(reports.filter_by_date(PAYMENTS, "paymentDate", None, None)) == 4


def test_search():
    assert [s.id for s in reports.search_students(STUDENTS, "bio")] == ["s2"]
    assert [p.id for p in reports.search_payments(PAYMENTS, "PRIYA")] == ["p3"]
    assert [e.id for e in reports.search_expenses(EXPENSES, "rent")] == ["e1"]
    assert len(reports.search_expenses(EXPENSES, "  ")) == 3


def test_sample_data_is_relative_to_today():
    payments = sample_data.sample_payments(today=TODAY)
    assert payments[0].paymentDate == "2026-09-05"
    assert payments[1].paymentDate == "2026-10-10"
    assert sample_data.sample_expenses(today=TODAY)[0].expenseDate == "2026-10-01"
