from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class AbsenceStrategy(ABC):
    """Strategy Pattern: what an employee with no entry is recorded as for a day."""

    @abstractmethod
    def decide_missing(self, *, work_date: date) -> StatusDecision:
        raise NotImplementedError
