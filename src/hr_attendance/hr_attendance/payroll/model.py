from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import SalaryStatus


@dataclass(frozen=True)
class SalaryBreakdown:
    """Result of prorating one month's base salary over attendance.

    Amounts keep full float precision; rounding happens on the slip only.
    """

    year: int
    month: int
    base_salary: float
    days_in_month: int
    per_day_salary: float
    payable_days: float
    unpaid_leave_days: float
    gross_earnings: float
    leave_deductions: float
    net_salary: float


@dataclass(frozen=True)
class SalaryRecord:
    """One generated salary entry. Append-only: corrections are new records."""

    employee_id: int
    month: str
    amount: float
    gross_salary: float
    deductions: float
    worked_days: float
    generated_on: date
    status: SalaryStatus = SalaryStatus.PAID
    slip_path: Optional[str] = None
    record_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "employee_id": self.employee_id,
            "month": self.month,
            "amount": self.amount,
            "gross_salary": self.gross_salary,
            "deductions": self.deductions,
            "worked_days": self.worked_days,
            "status": self.status.value,
            "date": self.generated_on.strftime("%Y-%m-%d"),
            "slip_path": self.slip_path,
        }


@dataclass(frozen=True)
class SalarySlip:
    """Everything the slip renderer prints."""

    employee_id: int
    employee_name: str
    month_label: str
    breakdown: SalaryBreakdown


@dataclass
class PayrollBatchResult:
    month: str
    generated: list[SalaryRecord] = field(default_factory=list)
    skipped: list[dict] = field(default_factory=list)
    failed: list[dict] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    def to_dict(self) -> dict:
        message = f"Successfully processed slips for {len(self.generated)} employees."
        if self.failed:
            message += f" Failed to process slips for {len(self.failed)} employees."
        return {
            "message": message,
            "month": self.month,
            "generated": [r.to_dict() for r in self.generated],
            "skipped": list(self.skipped),
            "failed": list(self.failed),
        }
