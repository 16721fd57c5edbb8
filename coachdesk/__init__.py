"""Coaching center ledger: students, courses, fee payments and expenses."""

__version__ = "0.1.0"
