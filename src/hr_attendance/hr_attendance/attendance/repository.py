from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceEntry


class AttendanceRepository(Protocol):
    """Per-employee attendance store keyed by (employee_id, work_date).

    Writes for one employee are serialized; writes for different employees are
    independent.
    """

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceEntry]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[AttendanceEntry]:
        """Newest date first."""
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceEntry]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceEntry]:
        raise NotImplementedError

    def append_entry(self, entry: AttendanceEntry) -> bool:
        """Insert iff the employee has no entry for entry.work_date.

        Returns False instead of creating a duplicate.
        """
        raise NotImplementedError

    def close_entry(self, *, employee_id: int, work_date: date, check_out: time) -> bool:
        """Set check_out iff the entry exists with a check_in and no check_out."""
        raise NotImplementedError

    def upsert_entry(self, entry: AttendanceEntry) -> None:
        """Create or overwrite (administrative override)."""
        raise NotImplementedError

    def insert_missing(self, *, work_date: date, status: AttendanceStatus) -> Sequence[int]:
        """Give every employee lacking an entry for work_date an empty one.

        Idempotent; returns only the employee ids whose entry this call wrote.
        """
        raise NotImplementedError
