from __future__ import annotations

import copy
import logging
from datetime import datetime
from typing import Callable, Optional

from ..core.enums import AttendanceStatus

logger = logging.getLogger(__name__)

_NEXT_STATUS = {
    AttendanceStatus.NOT_CHECKED_IN.value: AttendanceStatus.WORKING.value,
    AttendanceStatus.WORKING.value: AttendanceStatus.CHECKED_OUT.value,
}


class OptimisticAttendanceCache:
    """Client-side copy of the employee list with optimistic toggles.

    The server stays the only source of truth: after every mutation the cache
    is invalidated and refetched, and a failed mutation restores the last
    server-confirmed snapshot.
    """

    def __init__(
        self,
        fetch: Callable[[], list[dict]],
        toggle: Callable[[str], dict],
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._fetch = fetch
        self._toggle = toggle
        self._clock = clock
        self._confirmed: Optional[list[dict]] = None
        self._view: Optional[list[dict]] = None

    @property
    def employees(self) -> list[dict]:
        if self._view is None:
            self.refresh()
        return self._view

    def refresh(self) -> list[dict]:
        self._confirmed = self._fetch()
        self._view = copy.deepcopy(self._confirmed)
        return self._view

    def invalidate(self) -> None:
        self._view = None

    def toggle(self, employee_id: str) -> dict:
        # Copy on write: lists already handed out keep the confirmed state.
        current = copy.deepcopy(self.employees)
        self._view = current
        snapshot = copy.deepcopy(self._confirmed)

        for emp in current:
            if emp["id"] == employee_id:
                self._apply_local_toggle(emp)
                break

        try:
            record = self._toggle(employee_id)
        except Exception:
            logger.warning("toggle %s failed, restoring confirmed state", employee_id)
            self._confirmed = snapshot
            self._view = copy.deepcopy(snapshot)
            raise

        self.invalidate()
        self.refresh()
        return record

    def stats(self) -> dict:
        counts = {s.value: 0 for s in AttendanceStatus}
        for emp in self.employees:
            counts[emp["status"]] += 1
        return {
            "total": len(self.employees),
            "working": counts[AttendanceStatus.WORKING.value],
            "checkedOut": counts[AttendanceStatus.CHECKED_OUT.value],
            "notCheckedIn": counts[AttendanceStatus.NOT_CHECKED_IN.value],
        }

    def _apply_local_toggle(self, emp: dict) -> None:
        nxt = _NEXT_STATUS.get(emp["status"])
        if nxt is None:
            return
        emp["status"] = nxt
        record = dict(emp.get("todayRecord") or {})
        now = self._clock().isoformat()
        if nxt == AttendanceStatus.WORKING.value:
            record["checkinTime"] = now
            record["checkoutTime"] = None
        else:
            record["checkoutTime"] = now
        record["status"] = nxt
        emp["todayRecord"] = record
