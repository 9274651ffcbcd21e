from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator

from ..core.constants import MAX_RANGE_DAYS, MINUTES_PER_DAY
from ..core.exceptions import RangeError, ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_hhmm(value: str) -> time:
    """Parse a local time-of-day string in HH:MM form."""
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def format_hhmm(value: time | datetime) -> str:
    return value.strftime("%H:%M")


def minutes_since_midnight(value: str) -> int:
    t = parse_hhmm(value)
    return t.hour * 60 + t.minute


def minutes_between(check_in: str, check_out: str) -> int:
    """Minutes from check-in to check-out; a smaller check-out rolls to the next day."""
    start = minutes_since_midnight(check_in)
    end = minutes_since_midnight(check_out)
    if end < start:
        end += MINUTES_PER_DAY
    return end - start


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day in [start, end]."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def week_days(week_start: date, *, length: int = 7) -> list[date]:
    return [week_start + timedelta(days=i) for i in range(length)]


def require_range(date_from: date, date_to: date, *, max_days: int = MAX_RANGE_DAYS) -> None:
    if date_to < date_from:
        raise RangeError(f"Range end {date_to} is before start {date_from}")
    if (date_to - date_from).days + 1 > max_days:
        raise RangeError(f"Range {date_from}..{date_to} exceeds {max_days} days")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
