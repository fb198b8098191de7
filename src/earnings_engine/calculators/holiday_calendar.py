"""Holiday and compensated-workday lookups."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator
from datetime import date, datetime

from earnings_engine.calculators.calendar_math import as_date, day_span
from earnings_engine.calculators.types import HolidayConfig


class HolidayCalendar:
    """Set of special calendar dates, compared by calendar day only.

    Records with ``is_workday=False`` are holiday overrides; records with
    ``is_workday=True`` are compensated workdays. Only holiday overrides
    take part in next/previous holiday searches.
    """

    def __init__(self, records: Iterable[HolidayConfig] = ()):
        self._records: tuple[HolidayConfig, ...] = tuple(
            sorted(records, key=lambda r: r.date)
        )
        self._holiday_days = {r.date for r in self._records if not r.is_workday}
        self._workday_days = {r.date for r in self._records if r.is_workday}

        # Sorted holiday-type records for bisection
        self._holidays = [r for r in self._records if not r.is_workday]
        self._holiday_dates = [r.date for r in self._holidays]

    def __iter__(self) -> Iterator[HolidayConfig]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def records_on(self, day: date | datetime) -> list[HolidayConfig]:
        """All records on the given calendar day."""
        d = as_date(day)
        return [r for r in self._records if r.date == d]

    def is_holiday(self, day: date | datetime) -> bool:
        return as_date(day) in self._holiday_days

    def is_compensated_workday(self, day: date | datetime) -> bool:
        return as_date(day) in self._workday_days

    def next_holiday(self, day: date | datetime) -> HolidayConfig | None:
        """Earliest holiday strictly after ``day``."""
        idx = bisect_right(self._holiday_dates, as_date(day))
        if idx < len(self._holidays):
            return self._holidays[idx]
        return None

    def previous_holiday(self, day: date | datetime) -> HolidayConfig | None:
        """Latest holiday strictly before ``day``."""
        idx = bisect_left(self._holiday_dates, as_date(day))
        if idx > 0:
            return self._holidays[idx - 1]
        return None

    def days_until_next_holiday(self, day: date | datetime) -> int | None:
        """Days to the next holiday, or 0 when ``day`` is itself a holiday."""
        if self.is_holiday(day):
            return 0
        upcoming = self.next_holiday(day)
        if upcoming is None:
            return None
        return day_span(day, upcoming.date)

    def days_since_last_holiday(self, day: date | datetime) -> int | None:
        previous = self.previous_holiday(day)
        if previous is None:
            return None
        return day_span(previous.date, day)
