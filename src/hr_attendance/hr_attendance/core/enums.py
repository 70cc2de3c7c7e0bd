from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    EMPLOYEE = "Employee"
    ADMIN = "Admin"
    HR = "HR"


class AttendanceStatus(str, Enum):
    """Attendance statuses as stored and as displayed."""

    PRESENT = "Present"
    ABSENT = "Absent"
    PUNCHED_IN = "Punched In"
    HALF_DAY = "Half Day"
    SHORT_LEAVE = "Short Leave"
    SICK_LEAVE = "Sick Leave"
    PAID_LEAVE = "Paid Leave"
    NOT_PUNCHED_IN = "Not Punched In"


# Display-only values, derived on read.
DERIVED_STATUSES = frozenset({AttendanceStatus.PUNCHED_IN, AttendanceStatus.NOT_PUNCHED_IN})


class SalaryStatus(str, Enum):
    PAID = "Paid"
