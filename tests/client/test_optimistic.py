from __future__ import annotations

from datetime import datetime

import pytest

from src.attendance_tracker.attendance_tracker.client.optimistic import OptimisticAttendanceCache


class FakeServer:
    def __init__(self):
        self.rows = [
            {"id": "yamada", "name": "山田", "status": "not-checked-in", "todayRecord": None},
            {"id": "tanaka", "name": "田中", "status": "working", "todayRecord": {"checkinTime": "2024-06-01T08:00:00"}},
        ]
        self.fetches = 0
        self.fail_next = False

    def fetch(self):
        self.fetches += 1
        return [dict(r) for r in self.rows]

    def toggle(self, employee_id):
        if self.fail_next:
            raise ConnectionError("server down")
        for row in self.rows:
            if row["id"] == employee_id:
                row["status"] = "working" if row["status"] == "not-checked-in" else "checked-out"
                return {"employeeId": employee_id, "status": row["status"]}
        raise KeyError(employee_id)


@pytest.fixture()
def server():
    return FakeServer()


@pytest.fixture()
def cache(server):
    return OptimisticAttendanceCache(server.fetch, server.toggle, clock=lambda: datetime(2024, 6, 1, 9, 0))


def test_successful_toggle_refetches(cache, server):
    assert cache.stats()["notCheckedIn"] == 1

    record = cache.toggle("yamada")

    assert record["status"] == "working"
    assert server.fetches == 2
    assert cache.stats() == {"total": 2, "working": 2, "checkedOut": 0, "notCheckedIn": 0}


def test_failed_toggle_restores_confirmed_snapshot(cache, server):
    before = cache.employees
    server.fail_next = True

    with pytest.raises(ConnectionError):
        cache.toggle("tanaka")

    assert cache.employees == before
    assert cache.stats()["working"] == 1
    assert before[1]["status"] == "working"
    assert "checkoutTime" not in before[1]["todayRecord"]


def test_optimistic_state_visible_during_call_but_held_list_untouched(server):
    seen = {}

    def slow_toggle(employee_id):
        seen["view"] = [e["status"] for e in cache.employees]
        raise ConnectionError("timeout")

    cache = OptimisticAttendanceCache(server.fetch, slow_toggle, clock=lambda: datetime(2024, 6, 1, 9, 0))
    held = cache.employees

    with pytest.raises(ConnectionError):
        cache.toggle("yamada")

    assert seen["view"] == ["working", "working"]
    assert [e["status"] for e in held] == ["not-checked-in", "working"]
    assert [e["status"] for e in cache.employees] == ["not-checked-in", "working"]


def test_local_toggle_fills_times(cache):
    emp = {"id": "x", "status": "not-checked-in", "todayRecord": None}

    cache._apply_local_toggle(emp)
    assert emp["status"] == "working"
    assert emp["todayRecord"]["checkinTime"] == "2024-06-01T09:00:00"

    cache._apply_local_toggle(emp)
    assert emp["status"] == "checked-out"
    assert emp["todayRecord"]["checkoutTime"] == "2024-06-01T09:00:00"

    cache._apply_local_toggle(emp)
    assert emp["status"] == "checked-out"
