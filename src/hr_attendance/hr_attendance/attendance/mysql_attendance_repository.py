from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, lock_employee, normalize_mysql_time
from .model import AttendanceEntry
from .repository import AttendanceRepository

_COLUMNS = "employee_id, work_date, check_in, check_out, status"


def _to_entry(r: dict) -> AttendanceEntry:
    return AttendanceEntry(
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=normalize_mysql_time(r.get("check_in")),
        check_out=normalize_mysql_time(r.get("check_out")),
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_entries
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def list_for_employee(self, employee_id: int) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_entries
                WHERE employee_id=%s
                ORDER BY work_date DESC
                """,
                (int(employee_id),),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_entries
                WHERE work_date=%s
                ORDER BY employee_id ASC
                """,
                (work_date,),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_entries
                ORDER BY work_date DESC, employee_id ASC
                """
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def append_entry(self, entry: AttendanceEntry) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if not lock_employee(cur, entry.employee_id):
                return False
            # The unique (employee_id, work_date) key turns a lost race into a no-op.
            cur.execute(
                f"""
                INSERT IGNORE INTO attendance_entries({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s)
                """,
                (entry.employee_id, entry.work_date, entry.check_in, entry.check_out, entry.status.value),
            )
            return cur.rowcount > 0

    def close_entry(self, *, employee_id: int, work_date: date, check_out: time) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if not lock_employee(cur, employee_id):
                return False
            cur.execute(
                """
                UPDATE attendance_entries
                SET check_out=%s
                WHERE employee_id=%s AND work_date=%s
                  AND check_in IS NOT NULL AND check_out IS NULL
                """,
                (check_out, int(employee_id), work_date),
            )
            return cur.rowcount > 0

    def upsert_entry(self, entry: AttendanceEntry) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            lock_employee(cur, entry.employee_id)
            cur.execute(
                f"""
                INSERT INTO attendance_entries({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in=VALUES(check_in), check_out=VALUES(check_out), status=VALUES(status)
                """,
                (entry.employee_id, entry.work_date, entry.check_in, entry.check_out, entry.status.value),
            )

    def insert_missing(self, *, work_date: date, status: AttendanceStatus) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            # The NOT EXISTS read uses the transaction snapshot, so an employee who
            # punched in while this waited on the row lock can still be listed here.
            # Only ids whose insert actually wrote a row are reported as marked.
            cur.execute(
                """
                SELECT e.employee_id
                FROM employees e
                WHERE NOT EXISTS (
                    SELECT 1 FROM attendance_entries a
                    WHERE a.employee_id = e.employee_id AND a.work_date = %s
                )
                ORDER BY e.employee_id ASC
                FOR UPDATE
                """,
                (work_date,),
            )
            candidates = [int(r["employee_id"]) for r in fetchall(cur)]

            marked: list[int] = []
            for employee_id in candidates:
                cur.execute(
                    f"""
                    INSERT IGNORE INTO attendance_entries({_COLUMNS})
                    VALUES(%s,%s,NULL,NULL,%s)
                    """,
                    (employee_id, work_date, status.value),
                )
                if cur.rowcount == 1:
                    marked.append(employee_id)
            return marked
