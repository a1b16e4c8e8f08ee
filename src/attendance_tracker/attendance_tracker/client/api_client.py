from __future__ import annotations

from typing import Any, Optional

import requests


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class AttendanceApiClient:
    """Thin HTTP client for the attendance JSON API."""

    def __init__(self, base_url: str, *, timeout: float = 5.0, session: Optional[requests.Session] = None):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        res = self.session.request(method, f"{self._base_url}{path}", timeout=self._timeout, **kwargs)
        if res.status_code >= 400:
            try:
                message = res.json().get("message", res.reason)
            except ValueError:
                message = res.reason
            raise ApiError(res.status_code, message)
        return res.json()

    def list_employees(self) -> list[dict]:
        return self._request("GET", "/api/employees")

    def toggle_attendance(self, employee_id: str) -> dict:
        return self._request("POST", f"/api/employees/{employee_id}/toggle-attendance")

    def set_status(self, employee_id: str, date: str, status: str) -> dict:
        return self._request(
            "POST",
            f"/api/employees/{employee_id}/attendance/status",
            json={"date": date, "status": status},
        )

    def set_attendance(
        self,
        employee_id: str,
        date: str,
        *,
        checkin_time: Optional[str] = None,
        checkout_time: Optional[str] = None,
        status: Optional[str] = None,
    ) -> dict:
        payload = {"date": date, "checkinTime": checkin_time, "checkoutTime": checkout_time}
        if status:
            payload["status"] = status
        return self._request("POST", f"/api/employees/{employee_id}/attendance/set", json=payload)

    def bulk_update(self, changes: list[dict]) -> dict:
        return self._request("POST", "/api/attendance/bulk-update", json={"changes": changes})

    def daily_stats(self, date: Optional[str] = None) -> dict:
        params = {"date": date} if date else None
        return self._request("GET", "/api/attendance/stats", params=params)

    def history(self, employee_id: str, limit: Optional[int] = None) -> list[dict]:
        params = {"limit": limit} if limit else None
        return self._request("GET", f"/api/employees/{employee_id}/attendance/history", params=params)

    def history_stats(self, employee_id: str) -> dict:
        return self._request("GET", f"/api/employees/{employee_id}/attendance/stats")
