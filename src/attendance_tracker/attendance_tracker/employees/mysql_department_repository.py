from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .department_model import Department
from .department_repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory, label="SELECT * FROM departments") as (_, cur):
            cur.execute("SELECT department_id, name, created_at FROM departments ORDER BY name")
            rows = fetchall(cur)
            return [
                Department(department_id=str(r["department_id"]), name=r["name"], created_at=r.get("created_at"))
                for r in rows
            ]

    def get_by_name(self, name: str) -> Optional[Department]:
        with db_cursor(self._conn_factory, label="SELECT department by name") as (_, cur):
            cur.execute("SELECT department_id, name, created_at FROM departments WHERE name=%s", (name,))
            r = fetchone(cur)
            if not r:
                return None
            return Department(department_id=str(r["department_id"]), name=r["name"], created_at=r.get("created_at"))

    def create_department(self, *, name: str) -> Department:
        department_id = str(uuid.uuid4())
        created_at = datetime.now().replace(microsecond=0)
        with db_cursor(self._conn_factory, label="INSERT department") as (_, cur):
            cur.execute(
                "INSERT INTO departments(department_id, name, created_at) VALUES(%s,%s,%s)",
                (department_id, name, created_at),
            )
        return Department(department_id=department_id, name=name, created_at=created_at)
