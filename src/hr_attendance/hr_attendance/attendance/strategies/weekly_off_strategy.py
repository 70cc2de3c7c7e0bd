from __future__ import annotations

from datetime import date

from ...core.enums import AttendanceStatus
from .base import AbsenceStrategy, StatusDecision


class WeeklyOffStrategy(AbsenceStrategy):
    """Paid weekly off: counted as present."""

    def decide_missing(self, *, work_date: date) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
