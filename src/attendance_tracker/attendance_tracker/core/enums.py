from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance state for one day, stored as the raw string."""

    NOT_CHECKED_IN = "not-checked-in"
    WORKING = "working"
    CHECKED_OUT = "checked-out"

    @property
    def is_working_day(self) -> bool:
        return self in (AttendanceStatus.WORKING, AttendanceStatus.CHECKED_OUT)
