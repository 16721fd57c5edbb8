"""
Write-payload schemas.

These mirror the request bodies the REST backend accepts, so a bad form is
rejected before it leaves the dashboard (and offline writes obey the same
rules the backend would enforce).
"""
from __future__ import annotations

from typing import Any, Literal, Optional

import pydantic
from pydantic import BaseModel, Field

from coachdesk.errors import ValidationError


class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    course_id: Optional[str] = None
    status: Literal["active", "inactive", "completed"] = "active"


class StudentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    course_id: Optional[str] = None
    status: Optional[Literal["active", "inactive", "completed"]] = None


class CourseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    fee: float = Field(..., ge=0)
    duration: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None


class CourseUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    fee: Optional[float] = Field(None, ge=0)
    duration: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None


class PaymentCreate(BaseModel):
    student_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    date: Optional[str] = None
    mode: Literal["Cash", "UPI", "Bank", "Card"] = "Cash"
    status: Literal["completed", "pending", "failed"] = "completed"


class PaymentUpdate(BaseModel):
    student_id: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    date: Optional[str] = None
    mode: Optional[Literal["Cash", "UPI", "Bank", "Card"]] = None
    status: Optional[Literal["completed", "pending", "failed"]] = None


ExpenseCategory = Literal["rent", "salaries", "utilities", "marketing", "supplies", "other"]
ExpenseMode = Literal["cash", "upi", "bank", "card"]


class ExpenseCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    category: Optional[ExpenseCategory] = None
    date: Optional[str] = None
    mode: Optional[ExpenseMode] = None


class ExpenseUpdate(BaseModel):
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[float] = Field(None, gt=0)
    category: Optional[ExpenseCategory] = None
    date: Optional[str] = None
    mode: Optional[ExpenseMode] = None


SCHEMAS: dict[str, tuple[type[BaseModel], type[BaseModel]]] = {
    "students": (StudentCreate, StudentUpdate),
    "courses": (CourseCreate, CourseUpdate),
    "payments": (PaymentCreate, PaymentUpdate),
    "expenses": (ExpenseCreate, ExpenseUpdate),
}


def _describe(err: pydantic.ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ()))
        parts.append(f"{loc}: {e.get('msg')}" if loc else str(e.get("msg")))
    return "; ".join(parts) or "Invalid input"


def validate_payload(resource: str, payload: dict[str, Any], partial: bool = False) -> dict[str, Any]:
    """
    Validate a wire payload for `resource`.
    Returns the payload unchanged (only keys the caller sent) or raises ValidationError.
    """
    create_model, update_model = SCHEMAS[resource]
    model = update_model if partial else create_model
    try:
        model.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(_describe(e)) from e
    return payload
