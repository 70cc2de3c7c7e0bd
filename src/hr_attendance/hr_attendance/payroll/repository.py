from __future__ import annotations

from typing import Protocol, Sequence

from .model import SalaryRecord


class SalaryRepository(Protocol):
    def append_record(self, record: SalaryRecord) -> SalaryRecord:
        """Persist a new record and return it with its id."""
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[SalaryRecord]:
        """Newest first."""
        raise NotImplementedError

    def list_all(self) -> Sequence[SalaryRecord]:
        """Newest first."""
        raise NotImplementedError
