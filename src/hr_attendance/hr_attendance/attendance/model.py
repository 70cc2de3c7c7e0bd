from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import format_time
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: one employee's attendance for one calendar date.

    At most one entry exists per (employee_id, work_date). A missing time is
    None; the "--" placeholder only exists in presentation.
    """

    employee_id: int
    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    status: AttendanceStatus

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None

    def closed_at(self, check_out: time) -> "AttendanceEntry":
        return replace(self, check_out=check_out)

    def derived_status(self) -> AttendanceStatus:
        """Status as shown on the live board. Never written back."""
        if self.status == AttendanceStatus.PRESENT and self.check_out is None:
            return AttendanceStatus.PUNCHED_IN
        return self.status

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "check_in": format_time(self.check_in),
            "check_out": format_time(self.check_out),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model joining an entry with the owning employee (reports/boards)."""

    employee_id: int
    employee_name: str
    role: str
    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "role": self.role,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "check_in": format_time(self.check_in),
            "check_out": format_time(self.check_out),
            "status": self.status.value,
        }
