from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ...attendance.model import AttendanceEntry
from ..model import SalaryBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, *, base_salary: float, entries: Iterable[AttendanceEntry], year: int, month: int) -> SalaryBreakdown:
        raise NotImplementedError
