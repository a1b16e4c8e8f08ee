from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord, EmployeeAttendanceRow
from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.employees.department_model import Department
from src.attendance_tracker.attendance_tracker.employees.model import Employee


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id: dict[str, Employee] = {e.employee_id: e for e in employees}
        self._next_id = 0

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda e: e.name)

    def create_employee(self, *, name, department, email, avatar) -> Employee:
        self._next_id += 1
        emp = Employee(employee_id=f"emp-{self._next_id}", name=name, department=department, email=email, avatar=avatar)
        self._by_id[emp.employee_id] = emp
        return emp

    def update_employee(self, employee_id, *, name, department, email, avatar) -> Optional[Employee]:
        if employee_id not in self._by_id:
            return None
        emp = Employee(employee_id=employee_id, name=name, department=department, email=email, avatar=avatar)
        self._by_id[employee_id] = emp
        return emp


class InMemoryDepartments:
    def __init__(self, names=()):
        self._items: list[Department] = []
        for name in names:
            self.create_department(name=name)

    def list_all(self):
        return sorted(self._items, key=lambda d: d.name)

    def get_by_name(self, name):
        return next((d for d in self._items if d.name == name), None)

    def create_department(self, *, name) -> Department:
        d = Department(department_id=f"dept-{len(self._items) + 1}", name=name, created_at=datetime(2024, 1, 1))
        self._items.append(d)
        return d

    def rename(self, old: str, new: str) -> None:
        self._items = [replace(d, name=new) if d.name == old else d for d in self._items]


class InMemoryAttendance:
    """No uniqueness on (employee_id, work_date), like the real table. Counts writes."""

    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._rows: list[AttendanceRecord] = []
        self.inserts = 0
        self.updates = 0

    @property
    def writes(self) -> int:
        return self.inserts + self.updates

    def rows_for(self, employee_id: str, work_date: date) -> list[AttendanceRecord]:
        return [r for r in self._rows if r.employee_id == employee_id and r.work_date == work_date]

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        """Seed a row without counting it as a write."""
        self._rows.append(record)
        return record

    def get_for_employee_and_date(self, employee_id, work_date):
        rows = self.rows_for(employee_id, work_date)
        return rows[0] if rows else None

    def get_recent_for_employee(self, employee_id, limit):
        rows = [r for r in self._rows if r.employee_id == employee_id]
        rows.sort(key=lambda r: r.work_date, reverse=True)
        return rows[:limit]

    def create_record(self, *, employee_id, work_date, status, checkin_time, checkout_time):
        self.inserts += 1
        rec = AttendanceRecord(
            record_id=f"rec-{len(self._rows) + 1}",
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            checkin_time=checkin_time,
            checkout_time=checkout_time,
        )
        self._rows.append(rec)
        return rec

    def update_record(self, record_id, *, status, checkin_time, checkout_time):
        self.updates += 1
        for i, r in enumerate(self._rows):
            if r.record_id == record_id:
                self._rows[i] = replace(r, status=status, checkin_time=checkin_time, checkout_time=checkout_time)
                return self._rows[i]
        raise AssertionError(f"unknown record {record_id}")

    def list_employees_with_attendance(self, work_date):
        return [
            EmployeeAttendanceRow(employee=e, record=self.get_for_employee_and_date(e.employee_id, work_date))
            for e in self._employees.list_all()
        ]


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 6, 1, 9, 0, 0)


@pytest.fixture()
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture()
def yamada() -> Employee:
    return Employee(employee_id="yamada", name="山田", department="人事部")


@pytest.fixture()
def tanaka() -> Employee:
    return Employee(employee_id="tanaka", name="田中", department="営業部")


@pytest.fixture()
def employees_repo(yamada, tanaka) -> InMemoryEmployees:
    return InMemoryEmployees([yamada, tanaka])


@pytest.fixture()
def attendance_repo(employees_repo) -> InMemoryAttendance:
    return InMemoryAttendance(employees_repo)


@pytest.fixture()
def service(attendance_repo, employees_repo, clock) -> AttendanceService:
    return AttendanceService(attendance_repo, employees_repo, clock=clock)


@pytest.fixture()
def departments_repo() -> InMemoryDepartments:
    return InMemoryDepartments(["営業部", "人事部"])


@pytest.fixture()
def seed_record(attendance_repo):
    """Put a row straight into the store (not counted as a write)."""

    def _seed(employee_id, work_date, status, checkin=None, checkout=None) -> AttendanceRecord:
        return attendance_repo.add(
            AttendanceRecord(
                record_id=f"seed-{employee_id}-{work_date.isoformat()}",
                employee_id=employee_id,
                work_date=work_date,
                status=AttendanceStatus(status),
                checkin_time=checkin,
                checkout_time=checkout,
            )
        )

    return _seed
