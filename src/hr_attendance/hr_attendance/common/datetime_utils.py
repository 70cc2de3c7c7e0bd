from __future__ import annotations

import calendar
from datetime import date, datetime, time
from typing import Optional

import pytz

from ..core.constants import DEFAULT_TIMEZONE, NO_TIME
from ..core.exceptions import ValidationError

_MONTHS = {name.lower(): idx for idx, name in enumerate(calendar.month_name) if name}
_MONTHS.update({name.lower(): idx for idx, name in enumerate(calendar.month_abbr) if name})


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current wall-clock time in the organisation time zone.

    Note: Wrapped so tests can patch/mock easier. The client's clock is never
    trusted for punch rules.
    """
    return datetime.now(pytz.timezone(tz_name))


def today_local(tz_name: str = DEFAULT_TIMEZONE) -> date:
    return now_local(tz_name).date()


def parse_month_label(label: str) -> tuple[int, int]:
    """Parse a "Month Year" label such as "September 2025" into (year, month)."""
    parts = label.split() if isinstance(label, str) else []
    if len(parts) != 2:
        raise ValidationError(f"Invalid month {label!r}, expected e.g. 'September 2025'")

    month = _MONTHS.get(parts[0].lower())
    if not month or not parts[1].isdecimal():
        raise ValidationError(f"Invalid month {label!r}, expected e.g. 'September 2025'")
    return int(parts[1]), month


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def format_time(value: Optional[time]) -> str:
    return value.strftime("%H:%M:%S") if value else NO_TIME
