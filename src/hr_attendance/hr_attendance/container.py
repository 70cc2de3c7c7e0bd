from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .attendance.aggregator import AttendanceAggregator
from .attendance.factory import AbsenceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.sweeper import AbsenceSweeper
from .core.constants import (
    DEFAULT_COMPANY_NAME,
    DEFAULT_PUNCH_IN_END_HOUR,
    DEFAULT_PUNCH_IN_START_HOUR,
    DEFAULT_SWEEP_HOUR,
    DEFAULT_SWEEP_MINUTE,
    DEFAULT_TIMEZONE,
)
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .events.publisher import EventPublisher, LoggingEventPublisher
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.repository import SalaryRepository
from .payroll.service import PayrollService
from .payroll.slips import SlipRenderer, XlsxSlipRenderer
from .scheduler.service import DailyScheduler


@dataclass(frozen=True)
class Options:
    tz_name: str = DEFAULT_TIMEZONE
    punch_in_start_hour: int = DEFAULT_PUNCH_IN_START_HOUR
    punch_in_end_hour: int = DEFAULT_PUNCH_IN_END_HOUR
    sweep_hour: int = DEFAULT_SWEEP_HOUR
    sweep_minute: int = DEFAULT_SWEEP_MINUTE
    slip_dir: str = "var/salary-slips"
    company_name: str = DEFAULT_COMPANY_NAME

    @classmethod
    def from_settings(cls, settings) -> "Options":
        return cls(
            tz_name=getattr(settings, "ORG_TIMEZONE", DEFAULT_TIMEZONE),
            punch_in_start_hour=int(getattr(settings, "PUNCH_IN_START_HOUR", DEFAULT_PUNCH_IN_START_HOUR)),
            punch_in_end_hour=int(getattr(settings, "PUNCH_IN_END_HOUR", DEFAULT_PUNCH_IN_END_HOUR)),
            sweep_hour=int(getattr(settings, "SWEEP_HOUR", DEFAULT_SWEEP_HOUR)),
            sweep_minute=int(getattr(settings, "SWEEP_MINUTE", DEFAULT_SWEEP_MINUTE)),
            slip_dir=str(getattr(settings, "SLIP_DIR", "var/salary-slips")),
            company_name=getattr(settings, "COMPANY_NAME", DEFAULT_COMPANY_NAME),
        )


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    salary_repo: SalaryRepository
    events: EventPublisher

    attendance_service: AttendanceService
    absence_sweeper: AbsenceSweeper
    attendance_aggregator: AttendanceAggregator
    payroll_service: PayrollService
    scheduler: DailyScheduler

    def run_daily_sweep(self, reference_date=None):
        return self.absence_sweeper.run_daily_sweep(reference_date)


def build_services(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    salary_repo: SalaryRepository,
    options: Options = Options(),
    events: Optional[EventPublisher] = None,
    renderer: Optional[SlipRenderer] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    events = events or LoggingEventPublisher()
    renderer = renderer or XlsxSlipRenderer(Path(options.slip_dir), company_name=options.company_name)

    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        events,
        tz_name=options.tz_name,
        punch_in_start_hour=options.punch_in_start_hour,
        punch_in_end_hour=options.punch_in_end_hour,
    )
    absence_sweeper = AbsenceSweeper(
        attendance_repo,
        events,
        strategy_factory=AbsenceStrategyFactory(),
        tz_name=options.tz_name,
    )
    attendance_aggregator = AttendanceAggregator(attendance_repo, employees_repo, tz_name=options.tz_name)
    payroll_service = PayrollService(
        employees_repo,
        attendance_repo,
        salary_repo,
        renderer,
        events,
        tz_name=options.tz_name,
    )
    scheduler = DailyScheduler(
        absence_sweeper.run_daily_sweep,
        hour=options.sweep_hour,
        minute=options.sweep_minute,
        tz_name=options.tz_name,
        name="absence-sweep",
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        salary_repo=salary_repo,
        events=events,
        attendance_service=attendance_service,
        absence_sweeper=absence_sweeper,
        attendance_aggregator=attendance_aggregator,
        payroll_service=payroll_service,
        scheduler=scheduler,
    )


def build_container(*, db_config: dict, options: Options = Options(), events: Optional[EventPublisher] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        salary_repo=MySQLSalaryRepository(conn),
        options=options,
        events=events,
        conn=conn,
    )
