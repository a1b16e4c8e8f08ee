from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import StatusStrategy, TimeDecision


class CheckedOutStrategy(StatusStrategy):
    """Check out now; backfill the check-in when the day has none."""

    status = AttendanceStatus.CHECKED_OUT

    def decide(self, *, now: datetime, current: AttendanceRecord) -> TimeDecision:
        return TimeDecision(
            status=self.status,
            checkin_time=current.checkin_time or now,
            checkout_time=now,
        )
