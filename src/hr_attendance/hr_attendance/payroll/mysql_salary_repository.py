from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from ..core.enums import SalaryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import SalaryRecord
from .repository import SalaryRepository

_SELECT = """
    SELECT record_id, employee_id, month_label, amount, gross_salary, deductions,
           worked_days, status, generated_on, slip_path
    FROM salary_records
"""


def _to_record(r: dict) -> SalaryRecord:
    return SalaryRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        month=r["month_label"],
        amount=float(r["amount"]),
        gross_salary=float(r["gross_salary"]),
        deductions=float(r["deductions"]),
        worked_days=float(r["worked_days"]),
        status=SalaryStatus(r["status"]),
        generated_on=r["generated_on"],
        slip_path=r.get("slip_path"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append_record(self, record: SalaryRecord) -> SalaryRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_records(
                    employee_id, month_label, amount, gross_salary, deductions,
                    worked_days, status, generated_on, slip_path
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.employee_id,
                    record.month,
                    record.amount,
                    record.gross_salary,
                    record.deductions,
                    record.worked_days,
                    record.status.value,
                    record.generated_on,
                    record.slip_path,
                ),
            )
            return replace(record, record_id=int(cur.lastrowid))

    def list_for_employee(self, employee_id: int) -> Sequence[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE employee_id=%s ORDER BY generated_on DESC, record_id DESC",
                (int(employee_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY generated_on DESC, record_id DESC")
            return [_to_record(r) for r in fetchall(cur)]
