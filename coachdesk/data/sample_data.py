from __future__ import annotations

from datetime import date

from coachdesk.data.models import Course, Expense, Payment, Student


def _date_str(months_ago: int, day: int = 15, today: date | None = None) -> str:
    # Sample payments/expenses stay inside the recent reporting window
    today = today or date.today()
    month_index = today.year * 12 + (today.month - 1) - months_ago
    year, month = divmod(month_index, 12)
    return date(year, month + 1, day).isoformat()


def sample_courses() -> list[Course]:
    return [
        Course("course-1", "Mathematics", "Advanced mathematics for grades 9-12", 5000.0, "6 months"),
        Course("course-2", "Physics", "Physics concepts and problem solving", 4500.0, "6 months"),
        Course("course-3", "Chemistry", "Organic and inorganic chemistry", 4500.0, "6 months"),
        Course("course-4", "Biology", "Biology for medical entrance", 4000.0, "6 months"),
    ]


def sample_students() -> list[Student]:
    return [
        Student("student-1", "Rahul Sharma", "rahul@email.com", "9876543210", "Mathematics", "Morning", "2024-01-15", "active"),
        Student("student-2", "Priya Patel", "priya@email.com", "9876543211", "Physics", "Evening", "2024-02-01", "active"),
    ]


def sample_payments(today: date | None = None) -> list[Payment]:
    return [
        Payment(
            id="pay-1",
            studentId="student-1",
            studentName="Rahul Sharma",
            amount=5000.0,
            status="received",
            paymentMode="upi",
            paymentDate=_date_str(1, 5, today),
        ),
        Payment(
            id="pay-2",
            studentId="student-2",
            studentName="Priya Patel",
            amount=4500.0,
            status="pending",
            paymentMode="cash",
            paymentDate=_date_str(0, 10, today),
        ),
    ]


def sample_expenses(today: date | None = None) -> list[Expense]:
    return [
        Expense("exp-1", "rent", 15000.0, "Monthly rent", "bank", _date_str(0, 1, today)),
        Expense("exp-2", "utilities", 3500.0, "Electricity bill", "upi", _date_str(0, 5, today)),
    ]
