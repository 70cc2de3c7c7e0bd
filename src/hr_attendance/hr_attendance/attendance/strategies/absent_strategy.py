from __future__ import annotations

from datetime import date

from ...core.enums import AttendanceStatus
from .base import AbsenceStrategy, StatusDecision


class AbsentStrategy(AbsenceStrategy):
    """Working day: no punch-in means absent."""

    def decide_missing(self, *, work_date: date) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
