from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_TIMEZONE, EVENT_ABSENTEES_MARKED
from ..core.enums import AttendanceStatus
from ..core.exceptions import PersistenceError
from ..events.publisher import EventPublisher, LoggingEventPublisher
from .factory import AbsenceStrategyFactory
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    work_date: date
    status: AttendanceStatus
    marked_employee_ids: tuple[int, ...]

    @property
    def marked_count(self) -> int:
        return len(self.marked_employee_ids)

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "status": self.status.value,
            "marked": self.marked_count,
            "employee_ids": list(self.marked_employee_ids),
        }


class AbsenceSweeper:
    """End-of-day job: back-fill an entry for every employee who never punched in.

    Re-running for the same date is a no-op, so a failed or partial run is
    recovered by running it again.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        events: EventPublisher | None = None,
        *,
        strategy_factory: AbsenceStrategyFactory | None = None,
        tz_name: str = DEFAULT_TIMEZONE,
    ):
        self._attendance = attendance
        self._events = events or LoggingEventPublisher()
        self._factory = strategy_factory or AbsenceStrategyFactory()
        self._tz_name = tz_name

    def sweep(self, reference_date: date) -> SweepResult:
        decision = self._factory.for_date(reference_date).decide_missing(work_date=reference_date)
        logger.info("Marking employees without attendance on %s as %s", reference_date, decision.status.value)

        try:
            marked = tuple(self._attendance.insert_missing(work_date=reference_date, status=decision.status))
        except PersistenceError:
            logger.exception("Absence sweep for %s failed; it is safe to re-run", reference_date)
            raise

        result = SweepResult(work_date=reference_date, status=decision.status, marked_employee_ids=marked)
        if not marked:
            logger.info("All employees already have attendance for %s", reference_date)
            return result

        logger.info("Marked %d employees as %s for %s", result.marked_count, decision.status.value, reference_date)
        self._events.publish(EVENT_ABSENTEES_MARKED, result.to_dict())
        return result

    def run_daily_sweep(self, reference_date: Optional[date] = None) -> SweepResult:
        """Scheduled entry point; defaults to today in the organisation time zone."""
        return self.sweep(reference_date or today_local(self._tz_name))
