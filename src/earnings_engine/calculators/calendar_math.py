"""Date and time-of-day helpers used by the calculators."""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from datetime import date, datetime, time, timedelta
from decimal import Decimal

ONE_DAY = timedelta(days=1)


def as_date(value: date | datetime) -> date:
    """Calendar day of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def weekday(value: date | datetime) -> int:
    """Day of week with 0 = Sunday .. 6 = Saturday."""
    return as_date(value).isoweekday() % 7


def start_of_day(value: date | datetime) -> datetime:
    """Midnight at the start of the value's calendar day."""
    return datetime.combine(as_date(value), time.min)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def at_time(day: date | datetime, t: time) -> datetime:
    """Place the hour and minute of ``t`` on ``day``; seconds are dropped.

    A datetime ``day`` keeps its tzinfo so the result compares with it.
    """
    tzinfo = day.tzinfo if isinstance(day, datetime) else None
    return datetime.combine(as_date(day), time(t.hour, t.minute), tzinfo=tzinfo)


def seconds_of_day(t: time) -> int:
    """Seconds from midnight, hour and minute only."""
    return t.hour * 3600 + t.minute * 60


def elapsed_since_midnight(instant: datetime) -> Decimal:
    """Seconds from midnight to ``instant``, keeping sub-second precision."""
    seconds = instant.hour * 3600 + instant.minute * 60 + instant.second
    if instant.microsecond:
        return Decimal(seconds) + Decimal(instant.microsecond) / Decimal(1_000_000)
    return Decimal(seconds)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        if current == end:
            return
        current += ONE_DAY


def iter_month(year: int, month: int) -> Iterator[date]:
    """Yield every calendar day of a month."""
    return iter_days(date(year, month, 1), date(year, month, days_in_month(year, month)))


def day_span(start: date | datetime, end: date | datetime) -> int:
    """Signed number of calendar days from ``start`` to ``end``."""
    return (as_date(end) - as_date(start)).days
