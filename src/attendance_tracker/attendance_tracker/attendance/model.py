from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    A day without a stored row is represented by an implicit record
    (`record_id is None`) in the `not-checked-in` state.
    """

    record_id: Optional[str]
    employee_id: str
    work_date: date
    status: AttendanceStatus
    checkin_time: Optional[datetime] = None
    checkout_time: Optional[datetime] = None

    @classmethod
    def implicit(cls, employee_id: str, work_date: date) -> "AttendanceRecord":
        return cls(
            record_id=None,
            employee_id=employee_id,
            work_date=work_date,
            status=AttendanceStatus.NOT_CHECKED_IN,
        )

    @property
    def is_persisted(self) -> bool:
        return self.record_id is not None

    def has_state(
        self,
        status: AttendanceStatus,
        checkin_time: Optional[datetime],
        checkout_time: Optional[datetime],
    ) -> bool:
        # datetime equality compares instants, not identity.
        return (
            self.status == status
            and self.checkin_time == checkin_time
            and self.checkout_time == checkout_time
        )


@dataclass(frozen=True)
class EmployeeAttendanceRow:
    """Read-model: employee left-joined with one day's attendance."""

    employee: Employee
    record: Optional[AttendanceRecord]

    @property
    def status(self) -> AttendanceStatus:
        return self.record.status if self.record else AttendanceStatus.NOT_CHECKED_IN
