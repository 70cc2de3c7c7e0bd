from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date

from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AbsenceStrategy
from .strategies.weekly_off_strategy import WeeklyOffStrategy


@dataclass
class AbsenceStrategyFactory:
    """Factory Pattern: choose the absence rule from the day of week."""

    weekly_off_days: frozenset[int] = field(default_factory=lambda: frozenset({calendar.SUNDAY}))

    def for_date(self, work_date: date) -> AbsenceStrategy:
        if work_date.weekday() in self.weekly_off_days:
            return WeeklyOffStrategy()
        return AbsentStrategy()
