from __future__ import annotations

from datetime import date

from ..core.exceptions import InvalidPeriod, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_period(start: date, end: date) -> None:
    if start is None or end is None:
        raise InvalidPeriod("Pay period start and end are required")
    if start > end:
        raise InvalidPeriod(f"Pay period start {start.isoformat()} is after end {end.isoformat()}")
