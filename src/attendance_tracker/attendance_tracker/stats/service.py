from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_STATS_LOOKBACK, MONTH_DAYS, WEEK_DAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from .calculator.base import WorkingHoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator


@dataclass(frozen=True)
class DailyStats:
    total: int
    working: int
    checked_out: int
    not_checked_in: int


@dataclass(frozen=True)
class EmployeeHistoryStats:
    total_days: int
    working_days: int
    absent_days: int
    average_working_hours: float
    this_week_working_days: int
    this_month_working_days: int


class AttendanceStatsService:
    """Read-only aggregates over stored attendance.

    Reads are point-in-time snapshots; a concurrent toggle may or may not be
    reflected.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[WorkingHoursCalculator] = None,
        lookback: int = DEFAULT_STATS_LOOKBACK,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardHoursCalculator()
        self._lookback = int(lookback)

    def daily_stats(self, work_date: date) -> DailyStats:
        rows = self._attendance.list_employees_with_attendance(work_date)

        counts = {status: 0 for status in AttendanceStatus}
        for row in rows:
            counts[row.status] += 1

        return DailyStats(
            total=len(rows),
            working=counts[AttendanceStatus.WORKING],
            checked_out=counts[AttendanceStatus.CHECKED_OUT],
            not_checked_in=counts[AttendanceStatus.NOT_CHECKED_IN],
        )

    def employee_history_stats(
        self,
        employee_id: str,
        *,
        lookback: Optional[int] = None,
        today: Optional[date] = None,
    ) -> EmployeeHistoryStats:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

        history = self._attendance.get_recent_for_employee(
            employee_id, lookback if lookback is not None else self._lookback
        )
        today = today or now_local().date()
        week_start = today - timedelta(days=WEEK_DAYS)
        month_start = today - timedelta(days=MONTH_DAYS)

        worked = [r for r in history if r.status.is_working_day]
        timed = [r for r in history if r.checkin_time and r.checkout_time]
        total_hours = sum(self._calculator.worked_hours(r) for r in timed)

        return EmployeeHistoryStats(
            total_days=len(history),
            working_days=len(worked),
            absent_days=len(history) - len(worked),
            average_working_hours=total_hours / len(timed) if timed else 0.0,
            this_week_working_days=sum(1 for r in worked if r.work_date >= week_start),
            this_month_working_days=sum(1 for r in worked if r.work_date >= month_start),
        )
