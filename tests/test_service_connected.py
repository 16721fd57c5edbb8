from __future__ import annotations

import json

import pytest
import responses

from coachdesk.data.service import DataContext, Mode
from coachdesk.errors import TransportError, UnhandledError, ValidationError

BASE = "http://api.test/api"


def _body(call):
    return json.loads(call.request.body)


def test_load_maps_backend_rows(connected_ctx):
    assert connected_ctx.mode == Mode.CONNECTED
    s = connected_ctx.students.get("s-1")
    assert s.course == "Mathematics"
    assert s.joinDate == "2026-02-01"
    assert s.batch == "Morning"
    p = connected_ctx.payments.get("p-1")
    assert p.status == "received"
    assert p.paymentMode == "upi"
    assert connected_ctx.expenses.list()[0].category == "rent"
    assert connected_ctx.courses.get("c-2").duration == ""


def test_load_announces_connection(cfg, api_mock, notices):
    for path in ("health", "students", "courses", "payments", "expenses"):
        api_mock.add(responses.GET, f"{BASE}/{path}", json={"status": "ok"} if path == "health" else [])
    ctx = DataContext(cfg, notifier=notices.append)
    assert ctx.load() == Mode.CONNECTED
    assert [n.level for n in notices] == ["success"]


def test_failed_bulk_load_goes_offline(cfg, api_mock, notices):
    api_mock.add(responses.GET, f"{BASE}/health", json={"status": "ok"})
    api_mock.add(responses.GET, f"{BASE}/students", json=[])
    api_mock.add(responses.GET, f"{BASE}/courses", status=500)
    ctx = DataContext(cfg, notifier=notices.append)

    assert ctx.load() == Mode.OFFLINE
    assert len(ctx.courses.list()) == 4
    assert notices[-1].level == "error"


def test_create_payment_sends_wire_shape(connected_ctx, api_mock, notices):
    api_mock.add(
        responses.POST,
        f"{BASE}/payments",
        json={
            "id": "p-9",
            "student_id": "s-1",
            "amount": "1200.00",
            "mode": "UPI",
            "status": "completed",
            "date": "2026-10-01T00:00:00.000Z",
        },
        status=201,
    )
    p = connected_ctx.payments.create(
        {
            "studentId": "s-1",
            "studentName": "Rahul Sharma",
            "amount": 1200,
            "paymentMode": "upi",
            "paymentDate": "2026-10-01",
            "status": "received",
        }
    )

    sent = _body(api_mock.calls[-1])
    assert sent == {"student_id": "s-1", "amount": 1200, "date": "2026-10-01", "mode": "UPI", "status": "completed"}
    assert p.id == "p-9"
    assert p.status == "received"
    assert p.amount == 1200.0
    assert p.studentName == "Rahul Sharma"
    assert connected_ctx.payments.list()[-1] == p
    assert notices[-1].level == "success"


def test_create_student_resolves_course_id(connected_ctx, api_mock):
    api_mock.add(
        responses.POST,
        f"{BASE}/students",
        json={"id": "s-2", "name": "Asha", "course_id": "c-2", "status": "active"},
        status=201,
    )
    s = connected_ctx.students.create({"name": "Asha", "course": "Physics", "batch": "Evening"})

    assert _body(api_mock.calls[-1]) == {"name": "Asha", "course_id": "c-2"}
    assert s.course == "Physics"
    assert s.batch == "Evening"


def test_backend_validation_error_keeps_collection(connected_ctx, api_mock, notices):
    api_mock.add(
        responses.POST,
        f"{BASE}/courses",
        json={"error": [{"path": ["name"], "message": "Name is required"}]},
        status=400,
    )
    before = connected_ctx.courses.list()
    with pytest.raises(ValidationError, match="Name is required"):
        connected_ctx.courses.create({"name": "Art", "feeAmount": 100})
    assert connected_ctx.courses.list() == before
    assert connected_ctx.mode == Mode.CONNECTED
    assert notices[-1].level == "error"


def test_client_side_validation_skips_request(connected_ctx, api_mock):
    calls = len(api_mock.calls)
    with pytest.raises(ValidationError):
        connected_ctx.courses.create({"name": "", "feeAmount": 100})
    assert len(api_mock.calls) == calls


def test_transport_failure_does_not_flip_mode(connected_ctx, api_mock):
    api_mock.add(responses.POST, f"{BASE}/expenses", status=502)
    with pytest.raises(TransportError):
        connected_ctx.expenses.create({"description": "Ads", "amount": 500, "category": "marketing"})
    assert connected_ctx.mode == Mode.CONNECTED
    assert len(connected_ctx.expenses.list()) == 1


def test_update_merges_response_over_local(connected_ctx, api_mock, notices):
    api_mock.add(
        responses.PUT,
        f"{BASE}/students/s-1",
        json={"id": "s-1", "name": "Rahul S.", "email": "rahul@email.com", "course_id": "c-1", "status": "inactive"},
    )
    s = connected_ctx.students.update("s-1", {"name": "Rahul S.", "status": "inactive"})

    assert _body(api_mock.calls[-1]) == {"name": "Rahul S.", "status": "inactive"}
    assert s.status == "inactive"
    assert s.course == "Mathematics"
    assert s.joinDate == "2026-02-01"
    assert connected_ctx.students.get("s-1") == s
    assert notices[-1].message == "Student updated"


def test_empty_update_makes_no_request(connected_ctx, api_mock):
    calls = len(api_mock.calls)
    with pytest.raises(ValidationError, match="No fields to update"):
        connected_ctx.students.update("s-1", {"batch": "Weekend"})
    assert len(api_mock.calls) == calls


def test_update_not_found_returns_none(connected_ctx, api_mock, notices):
    api_mock.add(responses.PUT, f"{BASE}/courses/c-404", json={"error": "Course not found"}, status=404)
    before = connected_ctx.courses.list()
    assert connected_ctx.courses.update("c-404", {"name": "Gone"}) is None
    assert connected_ctx.courses.list() == before
    assert notices[-1].level == "not_found"
    assert notices[-1].message == "Course not found"


def test_delete_server_error_keeps_local_copy(connected_ctx, api_mock, notices):
    api_mock.add(responses.DELETE, f"{BASE}/payments/p-1", json={"error": "Internal server error"}, status=500)
    with pytest.raises(UnhandledError):
        connected_ctx.payments.delete("p-1")
    assert connected_ctx.payments.get("p-1") is not None
    assert notices[-1].message == "Internal server error"


def test_delete_removes_record(connected_ctx, api_mock):
    api_mock.add(
        responses.DELETE,
        f"{BASE}/expenses/e-1",
        json={"message": "Expense deleted successfully", "expense": {"id": "e-1"}},
    )
    removed = connected_ctx.expenses.delete("e-1")
    assert removed.id == "e-1"
    assert connected_ctx.expenses.list() == []


def test_delete_not_found_returns_none(connected_ctx, api_mock, notices):
    api_mock.add(responses.DELETE, f"{BASE}/students/x", json={"error": "Student not found"}, status=404)
    assert connected_ctx.students.delete("x") is None
    assert len(connected_ctx.students.list()) == 1
    assert notices[-1].level == "not_found"


def test_create_student_without_contact_details(connected_ctx, api_mock):
    api_mock.add(
        responses.POST,
        f"{BASE}/students",
        json={"id": "s-3", "name": "Asha", "email": None, "phone": None, "course_id": "c-1", "status": "active"},
        status=201,
    )
    s = connected_ctx.students.create({"name": "Asha", "email": "", "phone": "", "course": "Mathematics"})

    assert _body(api_mock.calls[-1]) == {"name": "Asha", "email": None, "phone": None, "course_id": "c-1"}
    assert s.email == ""
    assert s.phone == ""
    assert connected_ctx.students.get("s-3") == s


def test_unknown_course_is_rejected(connected_ctx, api_mock, notices):
    calls = len(api_mock.calls)
    with pytest.raises(ValidationError, match="Unknown course"):
        connected_ctx.students.create({"name": "Asha", "course": "Astronomy"})
    with pytest.raises(ValidationError, match="Unknown course"):
        connected_ctx.students.update("s-1", {"course": "Astronomy"})

    assert len(api_mock.calls) == calls
    assert connected_ctx.students.get("s-1").course == "Mathematics"
    assert len(connected_ctx.students.list()) == 1
    assert notices[-1].level == "error"


def test_clearing_course_unlinks_student(connected_ctx, api_mock):
    api_mock.add(
        responses.PUT,
        f"{BASE}/students/s-1",
        json={"id": "s-1", "name": "Rahul Sharma", "course_id": None, "course_name": None, "status": "active"},
    )
    s = connected_ctx.students.update("s-1", {"course": ""})

    assert _body(api_mock.calls[-1]) == {"course_id": None}
    assert s.course == ""
