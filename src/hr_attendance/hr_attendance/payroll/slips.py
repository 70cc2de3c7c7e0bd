from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from ..core.constants import DEFAULT_COMPANY_NAME
from .model import SalarySlip

_AMOUNT_FORMAT = "#,##0.00"
_HEADER_FILL = PatternFill(start_color="F0F0F0", end_color="F0F0F0", fill_type="solid")


class SlipRenderer(Protocol):
    def render(self, slip: SalarySlip) -> str:
        """Render and store the slip; return a reference (path/URL) to it."""
        raise NotImplementedError


def slip_filename(employee_id: int, month_label: str) -> str:
    safe_month = re.sub(r"\s+", "_", month_label.strip())
    return f"slip_{employee_id}_{safe_month}.xlsx"


class XlsxSlipRenderer(SlipRenderer):
    """Writes one workbook per employee and month into output_dir."""

    def __init__(self, output_dir: str | Path, *, company_name: str = DEFAULT_COMPANY_NAME):
        self._output_dir = Path(output_dir)
        self._company_name = company_name

    def _section(self, ws, row: int, title: str, value_title: str) -> int:
        for col, text in ((1, title), (2, value_title)):
            cell = ws.cell(row=row, column=col, value=text)
            cell.font = Font(bold=True)
            cell.fill = _HEADER_FILL
        return row + 1

    def _amount(self, ws, row: int, label: str, value: float, *, bold: bool = False) -> int:
        ws.cell(row=row, column=1, value=label).font = Font(bold=bold)
        cell = ws.cell(row=row, column=2, value=round(value, 2))
        cell.number_format = _AMOUNT_FORMAT
        cell.alignment = Alignment(horizontal="right")
        cell.font = Font(bold=bold)
        return row + 1

    def render(self, slip: SalarySlip) -> str:
        b = slip.breakdown
        wb = Workbook()
        ws = wb.active
        ws.title = "Salary Slip"
        ws.column_dimensions["A"].width = 28
        ws.column_dimensions["B"].width = 22

        ws.merge_cells("A1:B1")
        ws["A1"] = self._company_name
        ws["A1"].font = Font(bold=True, size=14)
        ws["A1"].alignment = Alignment(horizontal="center")
        ws.merge_cells("A2:B2")
        ws["A2"] = f"Salary slip for the month of {slip.month_label}"
        ws["A2"].alignment = Alignment(horizontal="center")

        row = self._section(ws, 4, "Employee Information", "Details")
        for label, value in (
            ("Employee ID", str(slip.employee_id)),
            ("Employee Name", slip.employee_name),
            ("Payable Days", f"{b.payable_days:g}"),
            ("Unpaid Leave Days", f"{b.unpaid_leave_days:g}"),
        ):
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
            row += 1

        row = self._section(ws, row + 1, "Earnings", "Amount")
        row = self._amount(ws, row, "Gross Earnings", b.gross_earnings)

        row = self._section(ws, row + 1, "Deductions", "Amount")
        row = self._amount(ws, row, "Leave Deductions", b.leave_deductions)

        row += 1
        row = self._amount(ws, row, "Gross Salary for Month", b.base_salary, bold=True)
        row = self._amount(ws, row, "Total Deductions", b.leave_deductions, bold=True)
        self._amount(ws, row, "Net Salary", b.net_salary, bold=True)

        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / slip_filename(slip.employee_id, slip.month_label)
        wb.save(path)
        return str(path)
