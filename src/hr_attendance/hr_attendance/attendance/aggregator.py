from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import AttendanceStatus
from ..employees.repository import EmployeeRepository
from .model import AttendanceRow
from .repository import AttendanceRepository


@dataclass(frozen=True)
class AttendanceSheet:
    """Date x employee grid: dates newest first, sparse date -> status per employee."""

    dates: list[str]
    rows: list[dict]

    def to_dict(self) -> dict:
        return {"dates": self.dates, "sheet": self.rows}


class AttendanceAggregator:
    """Read-side projections over the attendance store. Nothing here writes."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository, *, tz_name: str = DEFAULT_TIMEZONE):
        self._attendance = attendance
        self._employees = employees
        self._tz_name = tz_name

    def todays_status(self, today: Optional[date] = None) -> list[AttendanceRow]:
        today = today or today_local(self._tz_name)
        by_employee = {e.employee_id: e for e in self._attendance.list_for_date(today)}

        out: list[AttendanceRow] = []
        for employee in self._employees.list_all():
            entry = by_employee.get(employee.employee_id)
            out.append(
                AttendanceRow(
                    employee_id=employee.employee_id,
                    employee_name=employee.name,
                    role=employee.role.value,
                    work_date=today,
                    check_in=entry.check_in if entry else None,
                    check_out=entry.check_out if entry else None,
                    status=entry.derived_status() if entry else AttendanceStatus.NOT_PUNCHED_IN,
                )
            )
        return out

    def attendance_sheet(self) -> AttendanceSheet:
        by_employee: dict[int, dict[str, str]] = {}
        dates: set[str] = set()
        for entry in self._attendance.list_all():
            key = entry.work_date.strftime("%Y-%m-%d")
            dates.add(key)
            by_employee.setdefault(entry.employee_id, {})[key] = entry.status.value

        rows = [
            {
                "employee_id": e.employee_id,
                "employee_name": e.name,
                "attendance": by_employee.get(e.employee_id, {}),
            }
            for e in self._employees.list_all()
        ]
        return AttendanceSheet(dates=sorted(dates, reverse=True), rows=rows)

    def all_attendance(self) -> list[AttendanceRow]:
        """Every stored entry with its employee, newest date first then by name."""
        employees = {e.employee_id: e for e in self._employees.list_all()}
        rows = [
            AttendanceRow(
                employee_id=entry.employee_id,
                employee_name=employees[entry.employee_id].name,
                role=employees[entry.employee_id].role.value,
                work_date=entry.work_date,
                check_in=entry.check_in,
                check_out=entry.check_out,
                status=entry.status,
            )
            for entry in self._attendance.list_all()
            if entry.employee_id in employees
        ]
        rows.sort(key=lambda r: r.employee_name)
        rows.sort(key=lambda r: r.work_date, reverse=True)
        return rows
