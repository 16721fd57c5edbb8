"""
Shape mapping between backend rows and canonical records.

Backend rows arrive as loose JSON objects: snake_case columns, nullable
fields, numbers serialized as strings, and a few historical field names that
mean the same thing. Everything here is pure and total: any mapping (or None)
produces a canonical record, and any partial canonical dict produces a write
payload. Nothing in this module raises.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from coachdesk.data.models import (
    EXPENSE_CATEGORIES,
    PAYMENT_MODES,
    PAYMENT_STATUSES,
    STUDENT_STATUSES,
    Course,
    Expense,
    Payment,
    Student,
)


# canonical field -> raw keys, in order of preference
STUDENT_ALIASES = {
    "id": ("id",),
    "name": ("name",),
    "email": ("email",),
    "phone": ("phone",),
    "course": ("course_name", "course"),
    "batch": ("batch",),
    "joinDate": ("enrollment_date", "joinDate"),
    "status": ("status",),
}

COURSE_ALIASES = {
    "id": ("id",),
    "name": ("name",),
    "description": ("description",),
    "feeAmount": ("fee", "feeAmount"),
    "duration": ("duration",),
}

PAYMENT_ALIASES = {
    "id": ("id",),
    "studentId": ("student_id", "studentId"),
    "studentName": ("student_name", "studentName", "student"),
    "amount": ("amount",),
    "status": ("status",),
    "paymentMode": ("mode", "paymentMode"),
    "transactionId": ("transaction_id", "transactionId"),
    "paymentDate": ("date", "paymentDate"),
    "description": ("description",),
}

EXPENSE_ALIASES = {
    "id": ("id",),
    "category": ("category",),
    "amount": ("amount",),
    "description": ("description",),
    "paymentMode": ("mode", "paymentMode"),
    "expenseDate": ("date", "expenseDate"),
}

DEFAULT_BATCH = "Morning"

# wire status "completed" is the backend's name for a received payment
_WIRE_TO_PAYMENT_STATUS = {"completed": "received"}
_PAYMENT_STATUS_TO_WIRE = {"received": "completed"}

# backend enum casing for payment modes
_MODE_TO_WIRE = {"cash": "Cash", "upi": "UPI", "bank": "Bank", "card": "Card"}


def today_iso() -> str:
    return date.today().isoformat()


def has_any(raw: Optional[Mapping[str, Any]], keys: Iterable[str]) -> bool:
    """True when at least one of `keys` carries a non-empty value in `raw`."""
    return _pick(raw or {}, keys) is not None


def _pick(raw: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for k in keys:
        v = raw.get(k)
        if v is None or v == "":
            continue
        return v
    return None


def _text(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, Mapping):
        # nested relation objects, e.g. {"course": {"name": "Physics"}}
        return _text(v.get("name"))
    return str(v)


def _optional_text(v: Any) -> Optional[str]:
    s = _text(v)
    return s if s else None


def _number(v: Any) -> float:
    if v is None or isinstance(v, bool):
        return 0.0
    if isinstance(v, (int, float)):
        f = float(v)
    else:
        try:
            f = float(str(v).strip())
        except ValueError:
            return 0.0
    if math.isnan(f) or math.isinf(f):
        return 0.0
    return f


def _enum(v: Any, allowed: list[str], default: str, aliases: Optional[Mapping[str, str]] = None) -> str:
    if v is None:
        return default
    s = str(v).strip().lower()
    if aliases and s in aliases:
        s = aliases[s]
    return s if s in allowed else default


def _local_date(dt: datetime) -> date:
    # aware instants are read in the machine's local zone
    return dt.astimezone().date() if dt.tzinfo else dt.date()


def _date(v: Any) -> str:
    if isinstance(v, datetime):
        return _local_date(v).isoformat()
    if isinstance(v, date):
        return v.isoformat()
    if isinstance(v, str):
        s = v.strip()
        try:
            if len(s) == 10:
                return date.fromisoformat(s).isoformat()
            if len(s) > 10:
                return _local_date(datetime.fromisoformat(s.replace("Z", "+00:00"))).isoformat()
        except ValueError:
            pass
    return today_iso()


def _date_payload(v: Any) -> Any:
    if isinstance(v, datetime):
        return v.date().isoformat()
    if isinstance(v, date):
        return v.isoformat()
    return v


# --- raw -> canonical -------------------------------------------------------


def student_to_domain(raw: Optional[Mapping[str, Any]]) -> Student:
    r = raw or {}
    a = STUDENT_ALIASES
    return Student(
        id=_text(_pick(r, a["id"])),
        name=_text(_pick(r, a["name"])),
        email=_text(_pick(r, a["email"])),
        phone=_text(_pick(r, a["phone"])),
        course=_text(_pick(r, a["course"])),
        batch=_text(_pick(r, a["batch"])) or DEFAULT_BATCH,
        joinDate=_date(_pick(r, a["joinDate"])),
        status=_enum(_pick(r, a["status"]), STUDENT_STATUSES, "active"),
    )


def course_to_domain(raw: Optional[Mapping[str, Any]]) -> Course:
    r = raw or {}
    a = COURSE_ALIASES
    return Course(
        id=_text(_pick(r, a["id"])),
        name=_text(_pick(r, a["name"])),
        description=_text(_pick(r, a["description"])),
        feeAmount=_number(_pick(r, a["feeAmount"])),
        duration=_text(_pick(r, a["duration"])),
    )


def payment_to_domain(raw: Optional[Mapping[str, Any]]) -> Payment:
    r = raw or {}
    a = PAYMENT_ALIASES
    return Payment(
        id=_text(_pick(r, a["id"])),
        studentId=_text(_pick(r, a["studentId"])),
        studentName=_text(_pick(r, a["studentName"])),
        amount=_number(_pick(r, a["amount"])),
        status=_enum(_pick(r, a["status"]), PAYMENT_STATUSES, "pending", _WIRE_TO_PAYMENT_STATUS),
        paymentMode=_enum(_pick(r, a["paymentMode"]), PAYMENT_MODES, "cash"),
        paymentDate=_date(_pick(r, a["paymentDate"])),
        transactionId=_optional_text(_pick(r, a["transactionId"])),
        description=_optional_text(_pick(r, a["description"])),
    )


def expense_to_domain(raw: Optional[Mapping[str, Any]]) -> Expense:
    r = raw or {}
    a = EXPENSE_ALIASES
    return Expense(
        id=_text(_pick(r, a["id"])),
        category=_enum(_pick(r, a["category"]), EXPENSE_CATEGORIES, "other"),
        amount=_number(_pick(r, a["amount"])),
        description=_text(_pick(r, a["description"])),
        paymentMode=_enum(_pick(r, a["paymentMode"]), PAYMENT_MODES, "cash"),
        expenseDate=_date(_pick(r, a["expenseDate"])),
    )


# --- canonical partial -> write payload --------------------------------------


def _project(partial: Mapping[str, Any], renames: Mapping[str, str]) -> dict[str, Any]:
    return {wire: partial[canon] for canon, wire in renames.items() if canon in partial}


def student_to_write_payload(partial: Mapping[str, Any]) -> dict[str, Any]:
    out = _project(
        partial,
        {"name": "name", "email": "email", "phone": "phone", "courseId": "course_id", "status": "status"},
    )
    # optional contact fields are either a real value or null on the wire
    for key in ("email", "phone"):
        if key in out and not (out[key] or "").strip():
            out[key] = None
    return out


def course_to_write_payload(partial: Mapping[str, Any]) -> dict[str, Any]:
    return _project(
        partial,
        {"name": "name", "description": "description", "feeAmount": "fee", "duration": "duration"},
    )


def payment_to_write_payload(partial: Mapping[str, Any]) -> dict[str, Any]:
    out = _project(
        partial,
        {
            "studentId": "student_id",
            "amount": "amount",
            "paymentDate": "date",
            "paymentMode": "mode",
            "status": "status",
        },
    )
    if "date" in out:
        out["date"] = _date_payload(out["date"])
    if isinstance(out.get("mode"), str):
        out["mode"] = _MODE_TO_WIRE.get(out["mode"].lower(), out["mode"])
    if isinstance(out.get("status"), str):
        out["status"] = _PAYMENT_STATUS_TO_WIRE.get(out["status"], out["status"])
    return out


def expense_to_write_payload(partial: Mapping[str, Any]) -> dict[str, Any]:
    out = _project(
        partial,
        {
            "description": "description",
            "amount": "amount",
            "category": "category",
            "expenseDate": "date",
            "paymentMode": "mode",
        },
    )
    if "date" in out:
        out["date"] = _date_payload(out["date"])
    return out
