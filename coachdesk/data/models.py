from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


STUDENT_STATUSES = ["active", "inactive"]
PAYMENT_STATUSES = ["pending", "received"]
PAYMENT_MODES = ["cash", "upi", "bank", "card"]
EXPENSE_CATEGORIES = ["rent", "salaries", "utilities", "marketing", "supplies", "other"]
BATCHES = ["Morning", "Afternoon", "Evening", "Weekend"]

PAYMENT_MODE_LABELS = {
    "cash": "Cash",
    "upi": "UPI",
    "bank": "Bank Transfer",
    "card": "Card",
}

EXPENSE_CATEGORY_LABELS = {
    "rent": "Rent",
    "salaries": "Salaries",
    "utilities": "Utilities",
    "marketing": "Marketing",
    "supplies": "Supplies",
    "other": "Other",
}


# Canonical records. Dates are ISO calendar dates ("YYYY-MM-DD").


@dataclass(frozen=True)
class Student:
    id: str
    name: str
    email: str
    phone: str
    course: str  # course name, not id
    batch: str
    joinDate: str
    status: str = "active"


@dataclass(frozen=True)
class Course:
    id: str
    name: str
    description: str
    feeAmount: float
    duration: str


@dataclass(frozen=True)
class Payment:
    id: str
    studentId: str
    studentName: str  # snapshot taken when the payment was recorded
    amount: float
    status: str
    paymentMode: str
    paymentDate: str
    transactionId: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Expense:
    id: str
    category: str
    amount: float
    description: str
    paymentMode: str
    expenseDate: str
