from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import StatusStrategy, TimeDecision


class NotCheckedInStrategy(StatusStrategy):
    """Reset: both times cleared whatever they were."""

    status = AttendanceStatus.NOT_CHECKED_IN

    def decide(self, *, now: datetime, current: AttendanceRecord) -> TimeDecision:
        return TimeDecision(status=self.status, checkin_time=None, checkout_time=None)
