from __future__ import annotations

import time

import pytest
import responses

from coachdesk.config import AppConfig
from coachdesk.data.service import DataContext

BASE = "http://api.test/api"


def _set_tz(monkeypatch, name: str) -> None:
    monkeypatch.setenv("TZ", name)
    if hasattr(time, "tzset"):
        time.tzset()


@pytest.fixture(autouse=True)
def utc_local_time(monkeypatch):
    # backend instants like "...T00:00:00.000Z" keep their calendar date
    _set_tz(monkeypatch, "UTC")
    yield
    monkeypatch.undo()
    if hasattr(time, "tzset"):
        time.tzset()


@pytest.fixture
def local_tz(monkeypatch):
    """Switch the process timezone, e.g. local_tz("Asia/Kolkata")."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    return lambda name: _set_tz(monkeypatch, name)


@pytest.fixture
def cfg(tmp_path) -> AppConfig:
    return AppConfig(
        api_base_url=BASE,
        api_timeout_seconds=1.0,
        health_timeout_seconds=1.0,
        settings_path=str(tmp_path / "settings.json"),
        force_offline=False,
        currency_symbol="₹",
        log_level="DEBUG",
    )


@pytest.fixture
def api_mock():
    # unregistered URLs raise requests.ConnectionError, i.e. "backend down"
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def notices():
    return []


@pytest.fixture
def offline_ctx(cfg, api_mock, notices) -> DataContext:
    ctx = DataContext(cfg, notifier=notices.append)
    ctx.load()
    notices.clear()
    return ctx


BACKEND_COURSES = [
    {"id": "c-1", "name": "Mathematics", "fee": "5000.00", "duration": "6 months", "created_at": "2026-01-02T10:00:00Z"},
    {"id": "c-2", "name": "Physics", "fee": "4500.00", "duration": None, "created_at": "2026-01-03T10:00:00Z"},
]

BACKEND_STUDENTS = [
    {
        "id": "s-1",
        "name": "Rahul Sharma",
        "email": "rahul@email.com",
        "phone": None,
        "course_id": "c-1",
        "course_name": "Mathematics",
        "status": "active",
        "enrollment_date": "2026-02-01T00:00:00.000Z",
    },
]

BACKEND_PAYMENTS = [
    {
        "id": "p-1",
        "student_id": "s-1",
        "student_name": "Rahul Sharma",
        "amount": "5000.00",
        "mode": "UPI",
        "status": "completed",
        "date": "2026-09-05T00:00:00.000Z",
    },
]

BACKEND_EXPENSES = [
    {"id": "e-1", "description": "Monthly rent", "amount": "15000", "category": "Rent", "date": "2026-10-01"},
]


@pytest.fixture
def connected_ctx(cfg, api_mock, notices) -> DataContext:
    api_mock.add(responses.GET, f"{BASE}/health", json={"status": "ok"})
    api_mock.add(responses.GET, f"{BASE}/students", json=BACKEND_STUDENTS)
    api_mock.add(responses.GET, f"{BASE}/courses", json=BACKEND_COURSES)
    api_mock.add(responses.GET, f"{BASE}/payments", json=BACKEND_PAYMENTS)
    api_mock.add(responses.GET, f"{BASE}/expenses", json=BACKEND_EXPENSES)
    ctx = DataContext(cfg, notifier=notices.append)
    ctx.load()
    notices.clear()
    return ctx
