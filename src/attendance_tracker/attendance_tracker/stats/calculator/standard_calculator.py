from __future__ import annotations

from .base import WorkingHoursCalculator
from ...attendance.model import AttendanceRecord


class StandardHoursCalculator(WorkingHoursCalculator):
    """Standard rule: (out - in) in hours. A check-out before check-in counts negative."""

    def worked_hours(self, record: AttendanceRecord) -> float:
        return (record.checkout_time - record.checkin_time).total_seconds() / 3600.0


class ClampedHoursCalculator(StandardHoursCalculator):
    """(out - in), not below 0."""

    def worked_hours(self, record: AttendanceRecord) -> float:
        return max(super().worked_hours(record), 0.0)
