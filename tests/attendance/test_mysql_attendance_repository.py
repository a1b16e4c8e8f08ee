from __future__ import annotations

from datetime import date, datetime

from src.attendance_tracker.attendance_tracker.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus

D = date(2024, 6, 1)


class FakeCursor:
    def __init__(self, rows):
        self._rows = rows
        self.statements = []

    def execute(self, sql, params=None):
        self.statements.append(" ".join(sql.split()))

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnFactory:
    observer = None

    def __init__(self, rows):
        self.cursor = FakeCursor(rows)

    def connect(self):
        return FakeConnection(self.cursor)


def _joined(employee_id, name, record_id=None, status=None, checkin=None):
    return {
        "employee_id": employee_id,
        "name": name,
        "department": "営業部",
        "email": None,
        "avatar": None,
        "record_id": record_id,
        "status": status,
        "checkin_time": checkin,
        "checkout_time": None,
    }


def test_point_lookup_and_join_share_record_order():
    factory = FakeConnFactory([])
    repo = MySQLAttendanceRepository(factory)

    repo.get_for_employee_and_date("yamada", D)
    repo.list_employees_with_attendance(D)

    lookup, joined = factory.cursor.statements
    assert "ORDER BY record_id LIMIT 1" in lookup
    assert joined.endswith("ORDER BY e.name, e.employee_id, ar.record_id")


def test_duplicate_day_rows_keep_the_first_per_employee():
    factory = FakeConnFactory(
        [
            _joined("yamada", "山田", "rec-a", "working", datetime(2024, 6, 1, 9)),
            _joined("yamada", "山田", "rec-b", "checked-out", datetime(2024, 6, 1, 8)),
            _joined("tanaka", "田中"),
        ]
    )

    rows = MySQLAttendanceRepository(factory).list_employees_with_attendance(D)

    assert [r.employee.employee_id for r in rows] == ["yamada", "tanaka"]
    assert rows[0].record.record_id == "rec-a"
    assert rows[0].status == AttendanceStatus.WORKING
    assert rows[1].record is None
    assert rows[1].employee.avatar == "👤"
