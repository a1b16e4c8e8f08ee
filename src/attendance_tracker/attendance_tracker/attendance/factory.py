from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus
from .strategies.base import StatusStrategy
from .strategies.checked_out_strategy import CheckedOutStrategy
from .strategies.not_checked_in_strategy import NotCheckedInStrategy
from .strategies.working_strategy import WorkingStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the strategy for a requested status or a toggle."""

    def for_status(self, status: AttendanceStatus) -> StatusStrategy:
        if status == AttendanceStatus.WORKING:
            return WorkingStrategy()
        if status == AttendanceStatus.CHECKED_OUT:
            return CheckedOutStrategy()
        return NotCheckedInStrategy()

    def for_toggle(self, current: AttendanceStatus) -> Optional[StatusStrategy]:
        """not-checked-in -> working -> checked-out; None once checked out."""

        if current == AttendanceStatus.NOT_CHECKED_IN:
            return WorkingStrategy()
        if current == AttendanceStatus.WORKING:
            return CheckedOutStrategy()
        return None
