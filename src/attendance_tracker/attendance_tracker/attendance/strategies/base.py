from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord


@dataclass(frozen=True)
class TimeDecision:
    status: AttendanceStatus
    checkin_time: Optional[datetime]
    checkout_time: Optional[datetime]


class StatusStrategy(ABC):
    """Strategy Pattern: derive check-in/check-out times for one target status."""

    status: AttendanceStatus

    @abstractmethod
    def decide(self, *, now: datetime, current: AttendanceRecord) -> TimeDecision:
        raise NotImplementedError
