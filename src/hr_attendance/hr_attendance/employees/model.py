from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: the slice of an employee record this package needs.

    Profile data, credentials and documents are owned by the employee directory.
    """

    employee_id: int
    name: str
    email: str
    role: Role
    base_salary: Optional[float] = None

    @property
    def has_base_salary(self) -> bool:
        return bool(self.base_salary) and float(self.base_salary) > 0
