from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator

from ..core.exceptions import InvalidPeriod, ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time (expected HH:MM): {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date in the inclusive range."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def days_inclusive(start: date, end: date) -> int:
    return (end - start).days + 1


def range_contains(start: date, end: date, day: date) -> bool:
    return start <= day <= end


def parse_period_date(value: str, field_name: str) -> date:
    """Parse a pay period boundary; malformed input is an invalid period."""
    try:
        return parse_iso_date(value)
    except ValidationError as exc:
        raise InvalidPeriod(f"{field_name}: {exc}") from exc
