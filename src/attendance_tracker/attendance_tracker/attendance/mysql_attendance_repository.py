from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.constants import DEFAULT_AVATAR
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..employees.model import Employee
from .model import AttendanceRecord, EmployeeAttendanceRow
from .repository import AttendanceRepository

_RECORD_COLUMNS = "record_id, employee_id, work_date, status, checkin_time, checkout_time"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["record_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        checkin_time=r.get("checkin_time"),
        checkout_time=r.get("checkout_time"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory, label="SELECT attendance by employee/date") as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                ORDER BY record_id
                LIMIT 1
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory, label=f"SELECT attendance history for {employee_id}") as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create_record(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        checkin_time: Optional[datetime],
        checkout_time: Optional[datetime],
    ) -> AttendanceRecord:
        record_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory, label="INSERT attendance") as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records({_RECORD_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (record_id, employee_id, work_date, status.value, checkin_time, checkout_time),
            )
        return AttendanceRecord(
            record_id=record_id,
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            checkin_time=checkin_time,
            checkout_time=checkout_time,
        )

    def update_record(
        self,
        record_id: str,
        *,
        status: AttendanceStatus,
        checkin_time: Optional[datetime],
        checkout_time: Optional[datetime],
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory, label="UPDATE attendance") as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, checkin_time=%s, checkout_time=%s
                WHERE record_id=%s
                """,
                (status.value, checkin_time, checkout_time, record_id),
            )
            cur.execute(f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE record_id=%s", (record_id,))
            r = fetchone(cur)
            if not r:
                raise NotFoundError("Attendance record not found")
            return _row_to_record(r)

    def list_employees_with_attendance(self, work_date: date) -> Sequence[EmployeeAttendanceRow]:
        with db_cursor(self._conn_factory, label=f"JOIN employees with attendance for {work_date}") as (_, cur):
            cur.execute(
                """
                SELECT
                    e.employee_id, e.name, e.department, e.email, e.avatar,
                    ar.record_id, ar.status, ar.checkin_time, ar.checkout_time
                FROM employees e
                LEFT JOIN attendance_records ar
                    ON ar.employee_id = e.employee_id AND ar.work_date = %s
                ORDER BY e.name, e.employee_id, ar.record_id
                """,
                (work_date,),
            )
            rows = fetchall(cur)

        out: list[EmployeeAttendanceRow] = []
        seen: set[str] = set()
        for r in rows:
            # Racing inserts can leave two rows for one day; the lowest record_id wins,
            # same as get_for_employee_and_date.
            if str(r["employee_id"]) in seen:
                continue
            seen.add(str(r["employee_id"]))
            employee = Employee(
                employee_id=str(r["employee_id"]),
                name=r["name"],
                department=r["department"],
                email=r.get("email"),
                avatar=r.get("avatar") or DEFAULT_AVATAR,
            )
            record = None
            if r.get("record_id"):
                record = AttendanceRecord(
                    record_id=str(r["record_id"]),
                    employee_id=employee.employee_id,
                    work_date=work_date,
                    status=AttendanceStatus(r["status"]),
                    checkin_time=r.get("checkin_time"),
                    checkout_time=r.get("checkout_time"),
                )
            out.append(EmployeeAttendanceRow(employee=employee, record=record))
        return out
