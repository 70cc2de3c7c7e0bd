from __future__ import annotations

from typing import Iterable

from ..core.enums import DERIVED_STATUSES, AttendanceStatus
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_id(value, field_name: str) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a numeric id")


def require_ids(values: Iterable, field_name: str) -> list[int]:
    if isinstance(values, (str, bytes)) or not values:
        raise ValidationError(f"Please select at least one {field_name}")
    try:
        return [int(v) for v in values]
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be numeric ids")


def require_manual_status(value) -> AttendanceStatus:
    """Statuses an administrator may store. Derived display values are rejected."""
    try:
        status = AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown attendance status {value!r}")
    if status in DERIVED_STATUSES:
        raise ValidationError(f"{status.value!r} cannot be stored, it is derived on read")
    return status
