from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import StatusStrategy, TimeDecision


class WorkingStrategy(StatusStrategy):
    """Keep an existing check-in, otherwise check in now. Check-out is cleared."""

    status = AttendanceStatus.WORKING

    def decide(self, *, now: datetime, current: AttendanceRecord) -> TimeDecision:
        return TimeDecision(
            status=self.status,
            checkin_time=current.checkin_time or now,
            checkout_time=None,
        )
