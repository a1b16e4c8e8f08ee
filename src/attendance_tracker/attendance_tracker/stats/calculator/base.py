from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.model import AttendanceRecord


class WorkingHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked_hours(self, record: AttendanceRecord) -> float:
        """Hours between check-in and check-out; only called when both are set."""

        raise NotImplementedError
