from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.constants import DEFAULT_AVATAR
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _row_to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=str(row["employee_id"]),
        name=row["name"],
        department=row["department"],
        email=row.get("email"),
        avatar=row.get("avatar") or DEFAULT_AVATAR,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory, label="SELECT employee by id") as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, department, email, avatar
                FROM employees
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory, label="SELECT * FROM employees") as (_, cur):
            cur.execute("SELECT employee_id, name, department, email, avatar FROM employees ORDER BY name")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def create_employee(self, *, name: str, department: str, email: Optional[str], avatar: str) -> Employee:
        employee_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory, label="INSERT employee") as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(employee_id, name, department, email, avatar)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (employee_id, name, department, email, avatar),
            )
        return Employee(employee_id=employee_id, name=name, department=department, email=email, avatar=avatar)

    def update_employee(
        self,
        employee_id: str,
        *,
        name: str,
        department: str,
        email: Optional[str],
        avatar: str,
    ) -> Optional[Employee]:
        with db_cursor(self._conn_factory, label="updateEmployee") as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, department=%s, email=%s, avatar=%s
                WHERE employee_id=%s
                """,
                (name, department, email, avatar, employee_id),
            )
            # rowcount is 0 when values are unchanged, so re-read instead of trusting it.
            cur.execute(
                "SELECT employee_id, name, department, email, avatar FROM employees WHERE employee_id=%s",
                (employee_id,),
            )
            row = fetchone(cur)
            return _row_to_employee(row) if row else None
