from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_AVATAR


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee.

    `department` is a copy of the department label taken at create/edit time,
    not a reference to the Department row.
    """

    employee_id: str
    name: str
    department: str
    email: Optional[str] = None
    avatar: str = DEFAULT_AVATAR
