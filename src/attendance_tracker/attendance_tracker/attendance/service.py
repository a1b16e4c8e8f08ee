from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import combine_local, now_local
from ..common.validators import optional_hhmm, optional_status, require_iso_date, require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, EmployeeAttendanceRow
from .repository import AttendanceRepository
from .strategies.base import TimeDecision

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceChange:
    """One item of a bulk edit, already validated."""

    employee_id: str
    work_date: date
    checkin: Optional[str] = None
    checkout: Optional[str] = None
    status: Optional[AttendanceStatus] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AttendanceChange":
        return cls(
            employee_id=require_non_empty(payload.get("employeeId"), "employeeId"),
            work_date=require_iso_date(payload.get("date")),
            checkin=optional_hhmm(payload.get("checkinTime"), "checkinTime"),
            checkout=optional_hhmm(payload.get("checkoutTime"), "checkoutTime"),
            status=optional_status(payload.get("status")),
        )


@dataclass
class BulkUpdateResult:
    updated: int = 0
    unchanged: int = 0
    records: list[AttendanceRecord] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)


def resolve_status(
    checkin_time: Optional[datetime],
    checkout_time: Optional[datetime],
    explicit: Optional[AttendanceStatus] = None,
) -> AttendanceStatus:
    """Explicit status wins; otherwise derive it from which times are present."""

    if explicit is not None:
        return explicit
    if checkout_time is not None:
        return AttendanceStatus.CHECKED_OUT
    if checkin_time is not None:
        return AttendanceStatus.WORKING
    return AttendanceStatus.NOT_CHECKED_IN


def fill_missing_times(decision: TimeDecision, *, current: AttendanceRecord, now: datetime) -> TimeDecision:
    """Make a requested triple satisfy the per-status time rules.

    not-checked-in has no times; working has a check-in and no check-out;
    checked-out has both. A missing time is taken from the stored record,
    then from the check-out (for a check-in), then from `now`.
    """

    status = decision.status
    if status == AttendanceStatus.NOT_CHECKED_IN:
        return TimeDecision(status=status, checkin_time=None, checkout_time=None)

    if status == AttendanceStatus.WORKING:
        return TimeDecision(
            status=status,
            checkin_time=decision.checkin_time or current.checkin_time or now,
            checkout_time=None,
        )

    checkout_time = decision.checkout_time or current.checkout_time or now
    return TimeDecision(
        status=status,
        checkin_time=decision.checkin_time or current.checkin_time or checkout_time,
        checkout_time=checkout_time,
    )


class AttendanceService:
    """Reconciles requested attendance changes with the stored day record.

    Every mutation is read-then-write against the store with no locking;
    concurrent writers for the same day are last-write-wins.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._employees = employees
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock

    # ----- mutations -------------------------------------------------------

    def toggle(self, employee_id: str, work_date: date, *, now: datetime | None = None) -> AttendanceRecord:
        self._require_employee(employee_id)
        current = self._current(employee_id, work_date)

        strategy = self._factory.for_toggle(current.status)
        if strategy is None:
            logger.debug("toggle %s %s: already checked out, nothing to do", employee_id, work_date)
            return current

        decision = strategy.decide(now=now or self._clock(), current=current)
        record, _ = self._save(current, decision, create_when_default=True)
        return record

    def set_status(
        self,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        self._require_employee(employee_id)
        current = self._current(employee_id, work_date)

        decision = self._factory.for_status(status).decide(now=now or self._clock(), current=current)
        record, _ = self._save(current, decision, create_when_default=True)
        return record

    def set_explicit_times(
        self,
        employee_id: str,
        work_date: date,
        *,
        checkin: Optional[str] = None,
        checkout: Optional[str] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> AttendanceRecord:
        record, _ = self._set_explicit_times(
            employee_id, work_date, checkin=checkin, checkout=checkout, status=status
        )
        return record

    def bulk_update(self, changes: Sequence[Mapping[str, Any]]) -> BulkUpdateResult:
        """Apply each change on its own; one bad item does not undo the others."""

        result = BulkUpdateResult()
        for index, payload in enumerate(changes):
            try:
                if not isinstance(payload, Mapping):
                    raise ValidationError("change must be an object")
                change = AttendanceChange.from_payload(payload)
                record, written = self._set_explicit_times(
                    change.employee_id,
                    change.work_date,
                    checkin=change.checkin,
                    checkout=change.checkout,
                    status=change.status,
                )
            except DomainError as e:
                logger.warning("bulk-update item %d rejected: %s", index, e)
                result.errors.append({"index": index, "message": str(e)})
                continue

            result.records.append(record)
            if written:
                result.updated += 1
            else:
                result.unchanged += 1
        return result

    # ----- reads -----------------------------------------------------------

    def get_record(self, employee_id: str, work_date: date) -> AttendanceRecord:
        self._require_employee(employee_id)
        return self._current(employee_id, work_date)

    def get_history(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        self._require_employee(employee_id)
        return self._attendance.get_recent_for_employee(employee_id, limit)

    def list_with_attendance(self, work_date: date) -> Sequence[EmployeeAttendanceRow]:
        return self._attendance.list_employees_with_attendance(work_date)

    # ----- internals -------------------------------------------------------

    def _set_explicit_times(
        self,
        employee_id: str,
        work_date: date,
        *,
        checkin: Optional[str],
        checkout: Optional[str],
        status: Optional[AttendanceStatus],
    ) -> tuple[AttendanceRecord, bool]:
        self._require_employee(employee_id)

        checkin_time = combine_local(work_date, checkin) if checkin else None
        checkout_time = combine_local(work_date, checkout) if checkout else None
        current = self._current(employee_id, work_date)
        decision = fill_missing_times(
            TimeDecision(
                status=resolve_status(checkin_time, checkout_time, status),
                checkin_time=checkin_time,
                checkout_time=checkout_time,
            ),
            current=current,
            now=self._clock(),
        )
        return self._save(current, decision, create_when_default=False)

    def _require_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _current(self, employee_id: str, work_date: date) -> AttendanceRecord:
        existing = self._attendance.get_for_employee_and_date(employee_id, work_date)
        return existing or AttendanceRecord.implicit(employee_id, work_date)

    def _save(
        self,
        current: AttendanceRecord,
        decision: TimeDecision,
        *,
        create_when_default: bool,
    ) -> tuple[AttendanceRecord, bool]:
        """Insert, update or skip. Returns the resulting record and whether a write happened."""

        unchanged = current.has_state(decision.status, decision.checkin_time, decision.checkout_time)
        if unchanged and (current.is_persisted or not create_when_default):
            logger.debug("%s %s: no change, skipping write", current.employee_id, current.work_date)
            return current, False

        if current.is_persisted:
            record = self._attendance.update_record(
                current.record_id,
                status=decision.status,
                checkin_time=decision.checkin_time,
                checkout_time=decision.checkout_time,
            )
        else:
            record = self._attendance.create_record(
                employee_id=current.employee_id,
                work_date=current.work_date,
                status=decision.status,
                checkin_time=decision.checkin_time,
                checkout_time=decision.checkout_time,
            )

        logger.debug(
            "%s %s: %s -> %s (in=%s out=%s)",
            record.employee_id,
            record.work_date,
            current.status.value,
            record.status.value,
            record.checkin_time,
            record.checkout_time,
        )
        return record, True
