from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from coachdesk.config import AppConfig
from coachdesk.data import mapper, sample_data
from coachdesk.data.schemas import validate_payload
from coachdesk.data.transport import ApiClient, get_api_client
from coachdesk.errors import CoachDeskError, NotFoundError, UnhandledError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Mode(str, Enum):
    UNKNOWN = "unknown"
    PROBING = "probing"
    CONNECTED = "connected"
    OFFLINE = "offline"


@dataclass(frozen=True)
class Notice:
    level: str  # "success" | "offline" | "error" | "not_found" | "info"
    message: str


Notifier = Callable[[Notice], None]


@dataclass(frozen=True)
class EntityKind:
    resource: str
    label: str
    to_domain: Callable[[Optional[Mapping[str, Any]]], Any]
    to_write_payload: Callable[[Mapping[str, Any]], dict]
    samples: Callable[[], list]
    aliases: Mapping[str, tuple[str, ...]]
    # canonical fields kept from the caller when the backend response omits them
    carry_over: tuple[str, ...] = ()
    # extra canonical keys accepted on input that are not record fields
    write_only: tuple[str, ...] = ()
    prepare: Optional[Callable[["DataContext", dict], dict]] = field(default=None, compare=False)

    @property
    def fields(self) -> set[str]:
        return (set(self.aliases) | set(self.write_only)) - {"id"}


def _resolve_course_id(ctx: "DataContext", partial: dict) -> dict:
    """Students reference a course by name; the backend wants its id."""
    if "course" not in partial or "courseId" in partial or not ctx.connected:
        return partial
    name = partial.get("course") or ""
    if not name:
        return {**partial, "courseId": None}
    match = next((c for c in ctx.courses.list() if c.name == name), None)
    if match is None:
        raise ValidationError("Unknown course")
    return {**partial, "courseId": match.id}


STUDENTS = EntityKind(
    resource="students",
    label="Student",
    to_domain=mapper.student_to_domain,
    to_write_payload=mapper.student_to_write_payload,
    samples=sample_data.sample_students,
    aliases=mapper.STUDENT_ALIASES,
    carry_over=("course", "batch", "joinDate"),
    write_only=("courseId",),
    prepare=_resolve_course_id,
)

COURSES = EntityKind(
    resource="courses",
    label="Course",
    to_domain=mapper.course_to_domain,
    to_write_payload=mapper.course_to_write_payload,
    samples=sample_data.sample_courses,
    aliases=mapper.COURSE_ALIASES,
    carry_over=("description",),
)

PAYMENTS = EntityKind(
    resource="payments",
    label="Payment",
    to_domain=mapper.payment_to_domain,
    to_write_payload=mapper.payment_to_write_payload,
    samples=sample_data.sample_payments,
    aliases=mapper.PAYMENT_ALIASES,
    carry_over=("studentName", "transactionId", "description"),
)

EXPENSES = EntityKind(
    resource="expenses",
    label="Expense",
    to_domain=mapper.expense_to_domain,
    to_write_payload=mapper.expense_to_write_payload,
    samples=sample_data.sample_expenses,
    aliases=mapper.EXPENSE_ALIASES,
    carry_over=("paymentMode",),
)

ENTITY_KINDS = (STUDENTS, COURSES, PAYMENTS, EXPENSES)


class EntityCollection(Generic[T]):
    """
    In-session collection for one entity kind.

    Every mutation either completes (collection replaced with the new state)
    or raises without touching the collection.
    """

    def __init__(self, ctx: "DataContext", kind: EntityKind):
        self.ctx = ctx
        self.kind = kind
        self._records: list[T] = []

    # --- reads ---

    def list(self) -> list[T]:
        return list(self._records)

    def get(self, record_id: str) -> Optional[T]:
        return next((r for r in self._records if r.id == record_id), None)

    def _replace_all(self, records: list[T]) -> None:
        self._records = list(records)

    # --- writes ---

    def create(self, partial: Mapping[str, Any]) -> T:
        label = self.kind.label
        try:
            data = self._prepare(partial)
            payload = self.kind.to_write_payload(data)
            validate_payload(self.kind.resource, payload)
            if self.ctx.connected:
                raw = self.ctx.api.create(self.kind.resource, payload)
                record = self._from_response(raw, data)
            else:
                record = self.kind.to_domain({**self._record_fields(data), "id": self._new_id()})
        except Exception as e:
            raise self._fail(f"Failed to add {label.lower()}", e)

        self._records = self._records + [record]
        self._succeed(f"{label} added")
        return record

    def update(self, record_id: str, partial: Mapping[str, Any]) -> Optional[T]:
        label = self.kind.label
        try:
            data = self._prepare({k: v for k, v in partial.items() if k in self.kind.fields})
        except Exception as e:
            raise self._fail(f"Failed to update {label.lower()}", e)
        payload = self.kind.to_write_payload(data)
        empty = not payload if self.ctx.connected else not self._record_fields(data)
        if empty:
            raise self._fail(f"Failed to update {label.lower()}", ValidationError("No fields to update"))

        current = self.get(record_id)
        try:
            validate_payload(self.kind.resource, payload, partial=True)
            if self.ctx.connected:
                raw = self.ctx.api.update(self.kind.resource, record_id, payload)
                base = {**(asdict(current) if current else {}), **data}
                record = self._from_response(raw, base)
            elif current is None:
                raise NotFoundError(f"{label} not found")
            else:
                record = self.kind.to_domain({**asdict(current), **self._record_fields(data), "id": current.id})
        except NotFoundError as e:
            self._not_found(e)
            return None
        except Exception as e:
            raise self._fail(f"Failed to update {label.lower()}", e)

        self._records = [record if r.id == record_id else r for r in self._records]
        self._succeed(f"{label} updated")
        return record

    def delete(self, record_id: str) -> Optional[T]:
        label = self.kind.label
        current = self.get(record_id)
        try:
            if self.ctx.connected:
                self.ctx.api.delete(self.kind.resource, record_id)
            elif current is None:
                raise NotFoundError(f"{label} not found")
        except NotFoundError as e:
            self._not_found(e)
            return None
        except Exception as e:
            raise self._fail(f"Failed to delete {label.lower()}", e)

        self._records = [r for r in self._records if r.id != record_id]
        self._succeed(f"{label} deleted")
        return current

    # --- helpers ---

    def _prepare(self, partial: Mapping[str, Any]) -> dict:
        data = {k: v for k, v in dict(partial).items() if k != "id"}
        if self.kind.prepare is not None:
            data = self.kind.prepare(self.ctx, data)
        return data

    def _record_fields(self, data: Mapping[str, Any]) -> dict:
        return {k: v for k, v in data.items() if k in self.kind.aliases and k != "id"}

    def _from_response(self, raw: Any, base: Mapping[str, Any]) -> T:
        raw = raw if isinstance(raw, Mapping) else {}
        record = self.kind.to_domain(raw)
        kept = {
            f: base[f]
            for f in self.kind.carry_over
            if f in base and not mapper.has_any(raw, self.kind.aliases[f])
        }
        if not kept:
            return record
        return self.kind.to_domain({**asdict(record), **kept})

    def _new_id(self) -> str:
        taken = {r.id for r in self._records}
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in taken:
                return candidate

    def _succeed(self, message: str) -> None:
        if self.ctx.connected:
            self.ctx.notify(Notice("success", message))
        else:
            self.ctx.notify(Notice("offline", f"{message} (offline mode)"))

    def _not_found(self, err: NotFoundError) -> None:
        logger.warning("%s: %s", self.kind.resource, err.message)
        self.ctx.notify(Notice("not_found", err.message))

    def _fail(self, fallback: str, err: Exception) -> CoachDeskError:
        if isinstance(err, CoachDeskError):
            wrapped = err
        else:
            logger.exception("%s: unexpected failure", self.kind.resource)
            wrapped = UnhandledError(fallback)
        logger.warning("%s: %s (%s)", self.kind.resource, fallback, wrapped.message)
        self.ctx.notify(Notice("error", wrapped.message or fallback))
        return wrapped


class DataContext:
    """
    Session-scoped data context: connectivity mode plus the four collections.

    Lifecycle: UNKNOWN -> PROBING -> {CONNECTED, OFFLINE}. The mode chosen by
    load() governs every later write; a failing write never flips it.
    """

    def __init__(self, cfg: AppConfig, api: Optional[ApiClient] = None, notifier: Optional[Notifier] = None):
        self.cfg = cfg
        self.api = api or get_api_client(cfg)
        self.mode = Mode.UNKNOWN
        self._notifiers: list[Notifier] = [notifier] if notifier else []

        self.students: EntityCollection = EntityCollection(self, STUDENTS)
        self.courses: EntityCollection = EntityCollection(self, COURSES)
        self.payments: EntityCollection = EntityCollection(self, PAYMENTS)
        self.expenses: EntityCollection = EntityCollection(self, EXPENSES)

    @property
    def connected(self) -> bool:
        return self.mode == Mode.CONNECTED

    def collections(self) -> dict[str, EntityCollection]:
        return {
            "students": self.students,
            "courses": self.courses,
            "payments": self.payments,
            "expenses": self.expenses,
        }

    def subscribe(self, notifier: Notifier) -> None:
        self._notifiers.append(notifier)

    def notify(self, notice: Notice) -> None:
        for n in self._notifiers:
            n(notice)

    def load(self) -> Mode:
        """Probe the backend, then bulk-load every collection (or the sample set)."""
        self.mode = Mode.PROBING
        if self.cfg.force_offline:
            logger.info("USE_SAMPLE_DATA set, skipping health probe")
            self._go_offline()
            self.notify(Notice("info", "Using sample data (offline mode)"))
            return self.mode

        if not self.api.health():
            logger.info("API not available at %s, using sample data", self.cfg.api_base_url)
            self._go_offline()
            self.notify(
                Notice("info", f"Backend not connected - using sample data. Start your server at {self.cfg.api_base_url}")
            )
            return self.mode

        try:
            raw = {kind.resource: self.api.list(kind.resource) for kind in ENTITY_KINDS}
            mapped = {kind.resource: [kind.to_domain(r) for r in raw[kind.resource]] for kind in ENTITY_KINDS}
        except Exception as e:
            logger.error("Failed to load data from API: %s", e)
            self._go_offline()
            self.notify(Notice("error", "Failed to load data from API, using sample data"))
            return self.mode

        for resource, coll in self.collections().items():
            coll._replace_all(mapped[resource])
        self.mode = Mode.CONNECTED
        logger.info("Connected to %s", self.cfg.api_base_url)
        self.notify(Notice("success", "Connected to backend API"))
        return self.mode

    def refresh(self) -> Mode:
        return self.load()

    def _go_offline(self) -> None:
        for coll in self.collections().values():
            coll._replace_all(coll.kind.samples())
        self.mode = Mode.OFFLINE


def get_data_context(cfg: AppConfig, notifier: Optional[Notifier] = None) -> DataContext:
    ctx = DataContext(cfg, notifier=notifier)
    ctx.load()
    return ctx
