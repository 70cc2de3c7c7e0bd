from __future__ import annotations

from openpyxl import load_workbook

from src.hr_attendance.hr_attendance.payroll.model import SalaryBreakdown, SalarySlip
from src.hr_attendance.hr_attendance.payroll.slips import XlsxSlipRenderer, slip_filename


def test_slip_filename():
    assert slip_filename(7, "September  2025") == "slip_7_September_2025.xlsx"


def test_xlsx_slip_rounds_amounts_for_display(tmp_path):
    per_day = 10000 / 28
    breakdown = SalaryBreakdown(
        year=2025,
        month=2,
        base_salary=10000,
        days_in_month=28,
        per_day_salary=per_day,
        payable_days=1.75,
        unpaid_leave_days=1,
        gross_earnings=per_day * 1.75,
        leave_deductions=per_day,
        net_salary=per_day * 1.75,
    )
    renderer = XlsxSlipRenderer(tmp_path / "slips", company_name="Acme")

    path = renderer.render(SalarySlip(employee_id=7, employee_name="Asha", month_label="February 2025", breakdown=breakdown))

    ws = load_workbook(path).active
    values = {ws.cell(row=r, column=1).value: ws.cell(row=r, column=2).value for r in range(1, ws.max_row + 1)}
    assert ws["A1"].value == "Acme"
    assert ws["A2"].value == "Salary slip for the month of February 2025"
    assert values["Employee Name"] == "Asha"
    assert values["Payable Days"] == "1.75"
    assert values["Gross Earnings"] == 625.0
    assert values["Leave Deductions"] == 357.14
    assert values["Net Salary"] == 625.0
    assert values["Gross Salary for Month"] == 10000
