from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEFAULT_AVATAR
from ..core.exceptions import NotFoundError, ValidationError
from .department_model import Department
from .department_repository import DepartmentRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage employees (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_all(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create(
        self,
        *,
        name: str,
        department: str,
        email: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> Employee:
        fields = self._clean(name=name, department=department, email=email, avatar=avatar)
        employee = self._employees.create_employee(**fields)
        logger.info("Created employee %s (%s)", employee.employee_id, employee.department)
        return employee

    def update(
        self,
        employee_id: str,
        *,
        name: str,
        department: str,
        email: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> Employee:
        fields = self._clean(name=name, department=department, email=email, avatar=avatar)
        employee = self._employees.update_employee(employee_id, **fields)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    @staticmethod
    def _clean(*, name, department, email, avatar) -> dict:
        # The department label is copied as-is; it is never resolved to a Department row.
        return {
            "name": require_non_empty(name, "name"),
            "department": require_non_empty(department, "department"),
            "email": optional_text(email, "email"),
            "avatar": optional_text(avatar, "avatar") or DEFAULT_AVATAR,
        }


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, employees: EmployeeRepository):
        self._departments = departments
        self._employees = employees

    def list_all(self) -> Sequence[Department]:
        return self._departments.list_all()

    def create(self, *, name: str) -> Department:
        name = require_non_empty(name, "name")
        if self._departments.get_by_name(name):
            raise ValidationError("Department already exists")
        return self._departments.create_department(name=name)

    def employee_counts(self) -> dict[str, int]:
        """Employees per live department name.

        Matching is by label, so employees still carrying a renamed
        department's old label are not counted anywhere.
        """

        counts = {d.name: 0 for d in self._departments.list_all()}
        for employee in self._employees.list_all():
            if employee.department in counts:
                counts[employee.department] += 1
        return counts
