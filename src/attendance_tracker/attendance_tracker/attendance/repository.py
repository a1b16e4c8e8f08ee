from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, EmployeeAttendanceRow


class AttendanceRepository(Protocol):
    """Plain store for attendance rows.

    It does not enforce one row per (employee_id, work_date); callers must
    look up before inserting.
    """

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        """Newest work_date first."""

        raise NotImplementedError

    def create_record(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        checkin_time: Optional[datetime],
        checkout_time: Optional[datetime],
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update_record(
        self,
        record_id: str,
        *,
        status: AttendanceStatus,
        checkin_time: Optional[datetime],
        checkout_time: Optional[datetime],
    ) -> AttendanceRecord:
        raise NotImplementedError

    def list_employees_with_attendance(self, work_date: date) -> Sequence[EmployeeAttendanceRow]:
        """One row per employee; `record` is None when the day has no row."""

        raise NotImplementedError
