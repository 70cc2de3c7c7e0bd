from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_month_label, today_local
from ..common.validators import require_ids, require_non_empty
from ..core.constants import DEFAULT_TIMEZONE, EVENT_SALARY_GENERATED
from ..core.exceptions import EmployeeNotFoundError, MissingBaseSalaryError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..events.publisher import EventPublisher, LoggingEventPublisher
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollBatchResult, SalaryRecord, SalarySlip
from .repository import SalaryRepository
from .slips import SlipRenderer

logger = logging.getLogger(__name__)


class PayrollService:
    """Month-end salary generation for a batch of employees.

    Every employee is computed, rendered and stored on its own; a skip or a
    failure for one never stops or undoes the others.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        salaries: SalaryRepository,
        renderer: SlipRenderer,
        events: EventPublisher | None = None,
        *,
        calculator: Optional[PayrollCalculator] = None,
        tz_name: str = DEFAULT_TIMEZONE,
    ):
        self._employees = employees
        self._attendance = attendance
        self._salaries = salaries
        self._renderer = renderer
        self._events = events or LoggingEventPublisher()
        self._calculator = calculator or StandardPayrollCalculator()
        self._tz_name = tz_name

    def generate(self, employee_ids: Iterable[int], month_label: str, *, today: Optional[date] = None) -> PayrollBatchResult:
        ids = require_ids(employee_ids, "employee")
        month_label = require_non_empty(month_label, "month")
        year, month = parse_month_label(month_label)
        today = today or today_local(self._tz_name)

        result = PayrollBatchResult(month=month_label)
        found = {e.employee_id: e for e in self._employees.list_by_ids(ids)}

        for employee_id in dict.fromkeys(ids):
            employee = found.get(employee_id)
            if employee is None:
                self._skip(result, employee_id, EmployeeNotFoundError(f"Employee {employee_id} not found"))
                continue
            if not employee.has_base_salary:
                self._skip(
                    result,
                    employee_id,
                    MissingBaseSalaryError(f"Skipping {employee.name} due to missing or invalid salary."),
                )
                continue

            try:
                record = self._generate_one(employee, month_label, year=year, month=month, today=today)
            except Exception as exc:
                logger.exception("Failed to process salary slip for %s", employee.name)
                result.failed.append({"employee_id": employee_id, "reason": str(exc) or type(exc).__name__})
                continue

            result.generated.append(record)

        logger.info(
            "Payroll %s: %d generated, %d skipped, %d failed",
            month_label,
            len(result.generated),
            len(result.skipped),
            len(result.failed),
        )
        return result

    def _skip(self, result: PayrollBatchResult, employee_id: int, reason: Exception) -> None:
        logger.warning("%s", reason)
        result.skipped.append({"employee_id": employee_id, "reason": str(reason)})

    def _generate_one(self, employee: Employee, month_label: str, *, year: int, month: int, today: date) -> SalaryRecord:
        entries = self._attendance.list_for_employee(employee.employee_id)
        breakdown = self._calculator.compute(
            base_salary=float(employee.base_salary),
            entries=entries,
            year=year,
            month=month,
        )

        slip_path = self._renderer.render(
            SalarySlip(
                employee_id=employee.employee_id,
                employee_name=employee.name,
                month_label=month_label,
                breakdown=breakdown,
            )
        )

        record = self._salaries.append_record(
            SalaryRecord(
                employee_id=employee.employee_id,
                month=month_label,
                amount=breakdown.net_salary,
                gross_salary=breakdown.gross_earnings,
                deductions=breakdown.leave_deductions,
                worked_days=breakdown.payable_days,
                generated_on=today,
                slip_path=slip_path,
            )
        )
        logger.info("Slip processed and stored for %s", employee.name)
        self._events.publish(EVENT_SALARY_GENERATED, record.to_dict())
        return record

    def salary_history(self, employee_id: int) -> Sequence[SalaryRecord]:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFoundError(f"Employee {employee_id} not found")
        return self._salaries.list_for_employee(int(employee_id))

    def all_salary_history(self) -> list[dict]:
        names = {e.employee_id: e.name for e in self._employees.list_all()}
        rows = []
        for record in self._salaries.list_all():
            row = record.to_dict()
            row["employee_name"] = names.get(record.employee_id, "-")
            rows.append(row)
        return rows
