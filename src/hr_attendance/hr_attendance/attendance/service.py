from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

import pytz

from ..common.datetime_utils import now_local
from ..common.validators import require_manual_status
from ..core.constants import (
    DEFAULT_PUNCH_IN_END_HOUR,
    DEFAULT_PUNCH_IN_START_HOUR,
    DEFAULT_TIMEZONE,
    EVENT_ATTENDANCE_CHANGED,
)
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyPunchedInError,
    EmployeeNotFoundError,
    NoOpenPunchInError,
    OutOfWindowError,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..events.publisher import EventPublisher, LoggingEventPublisher
from .model import AttendanceEntry, AttendanceRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Punch clock: time-gated punch-in, punch-out and administrative override."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        events: EventPublisher | None = None,
        *,
        tz_name: str = DEFAULT_TIMEZONE,
        punch_in_start_hour: int = DEFAULT_PUNCH_IN_START_HOUR,
        punch_in_end_hour: int = DEFAULT_PUNCH_IN_END_HOUR,
    ):
        if not 0 <= int(punch_in_start_hour) < int(punch_in_end_hour) <= 24:
            raise ValueError("punch-in window must satisfy 0 <= start < end <= 24")

        self._attendance = attendance
        self._employees = employees
        self._events = events or LoggingEventPublisher()
        self._tz_name = tz_name
        self._start_hour = int(punch_in_start_hour)
        self._end_hour = int(punch_in_end_hour)

    def _local(self, now: datetime | None) -> datetime:
        if now is None:
            return now_local(self._tz_name)
        if now.tzinfo is None:
            return now
        return now.astimezone(pytz.timezone(self._tz_name))

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise EmployeeNotFoundError(f"Employee {employee_id} not found")
        return employee

    def _publish(self, employee: Employee, entry: AttendanceEntry, status: AttendanceStatus) -> None:
        row = AttendanceRow(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            role=employee.role.value,
            work_date=entry.work_date,
            check_in=entry.check_in,
            check_out=entry.check_out,
            status=status,
        )
        self._events.publish(EVENT_ATTENDANCE_CHANGED, row.to_dict())

    def in_punch_window(self, now: datetime) -> bool:
        return self._start_hour <= now.hour < self._end_hour

    def punch_in(self, employee_id: int, *, now: datetime | None = None) -> AttendanceEntry:
        now = self._local(now)
        if not self.in_punch_window(now):
            raise OutOfWindowError(
                f"Punch-in is only allowed between {self._start_hour:02d}:00 and {self._end_hour:02d}:00."
            )

        employee = self._require_employee(employee_id)
        today = now.date()
        if self._attendance.get_for_employee_and_date(employee.employee_id, today):
            raise AlreadyPunchedInError("Already punched in for today")

        entry = AttendanceEntry(
            employee_id=employee.employee_id,
            work_date=today,
            check_in=now.time().replace(microsecond=0),
            check_out=None,
            status=AttendanceStatus.PRESENT,
        )
        # A concurrent punch-in may have won between the read above and this write.
        if not self._attendance.append_entry(entry):
            raise AlreadyPunchedInError("Already punched in for today")

        logger.info("Employee %s punched in at %s", employee.employee_id, entry.check_in)
        self._publish(employee, entry, AttendanceStatus.PUNCHED_IN)
        return entry

    def punch_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceEntry:
        now = self._local(now)
        employee = self._require_employee(employee_id)
        today = now.date()

        entry = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if entry and entry.check_in is not None and entry.check_out is not None:
            raise NoOpenPunchInError("Already punched out for today")
        if not entry or not entry.is_open:
            raise NoOpenPunchInError("Cannot punch out without punching in first")

        check_out = now.time().replace(microsecond=0)
        if not self._attendance.close_entry(employee_id=employee.employee_id, work_date=today, check_out=check_out):
            raise NoOpenPunchInError("Cannot punch out without punching in first")

        closed = entry.closed_at(check_out)
        logger.info("Employee %s punched out at %s", employee.employee_id, check_out)
        self._publish(employee, closed, closed.status)
        return closed

    def mark_manual(self, employee_id: int, work_date: date, status) -> AttendanceEntry:
        """Create or overwrite an entry regardless of the punch window; times are cleared."""
        if not isinstance(work_date, date):
            raise ValidationError("A date is required")
        status = require_manual_status(status)
        employee = self._require_employee(employee_id)

        entry = AttendanceEntry(
            employee_id=employee.employee_id,
            work_date=work_date,
            check_in=None,
            check_out=None,
            status=status,
        )
        self._attendance.upsert_entry(entry)

        logger.info("Attendance of employee %s on %s set to %s", employee.employee_id, work_date, status.value)
        self._publish(employee, entry, status)
        return entry

    def today_entry(self, employee_id: int, *, today: Optional[date] = None) -> Optional[AttendanceEntry]:
        employee = self._require_employee(employee_id)
        today = today or self._local(None).date()
        return self._attendance.get_for_employee_and_date(employee.employee_id, today)

    def history(self, employee_id: int) -> Sequence[AttendanceEntry]:
        employee = self._require_employee(employee_id)
        return self._attendance.list_for_employee(employee.employee_id)
