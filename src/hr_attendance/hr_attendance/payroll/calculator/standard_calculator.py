from __future__ import annotations

from typing import Iterable

from ...attendance.model import AttendanceEntry
from ...common.datetime_utils import days_in_month
from ...core.enums import AttendanceStatus
from ..model import SalaryBreakdown
from .base import PayrollCalculator

PAYABLE_WEIGHTS = {
    AttendanceStatus.PRESENT: 1.0,
    AttendanceStatus.PAID_LEAVE: 1.0,
    AttendanceStatus.HALF_DAY: 0.5,
    AttendanceStatus.SHORT_LEAVE: 0.75,
}

UNPAID_WEIGHTS = {
    AttendanceStatus.ABSENT: 1.0,
    AttendanceStatus.SICK_LEAVE: 1.0,
}


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: base salary / days in month, times payable days.

    Only entries whose date falls in the target calendar month count. Days
    without an entry, or with a status in neither table, count for nothing.
    Net equals gross: unpaid days are already missing from gross, and the
    deduction figure is reported alongside for the slip only.
    """

    def tally(self, entries: Iterable[AttendanceEntry], *, year: int, month: int) -> tuple[float, float]:
        payable = 0.0
        unpaid = 0.0
        for entry in entries:
            if entry.work_date.year != year or entry.work_date.month != month:
                continue
            payable += PAYABLE_WEIGHTS.get(entry.status, 0.0)
            unpaid += UNPAID_WEIGHTS.get(entry.status, 0.0)
        return payable, unpaid

    def compute(self, *, base_salary: float, entries: Iterable[AttendanceEntry], year: int, month: int) -> SalaryBreakdown:
        total_days = days_in_month(year, month)
        per_day = float(base_salary) / total_days
        payable, unpaid = self.tally(entries, year=year, month=month)

        gross = per_day * payable
        return SalaryBreakdown(
            year=year,
            month=month,
            base_salary=float(base_salary),
            days_in_month=total_days,
            per_day_salary=per_day,
            payable_days=payable,
            unpaid_leave_days=unpaid,
            gross_earnings=gross,
            leave_deductions=per_day * unpaid,
            net_salary=gross,
        )
