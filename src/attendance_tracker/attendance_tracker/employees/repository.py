from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create_employee(self, *, name: str, department: str, email: Optional[str], avatar: str) -> Employee:
        raise NotImplementedError

    def update_employee(
        self,
        employee_id: str,
        *,
        name: str,
        department: str,
        email: Optional[str],
        avatar: str,
    ) -> Optional[Employee]:
        raise NotImplementedError
