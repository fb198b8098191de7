"""Workday classification and time-of-day work status."""

from __future__ import annotations

import logging
from datetime import date, datetime

from earnings_engine.calculators.calendar_math import (
    ONE_DAY,
    as_date,
    at_time,
    weekday,
)
from earnings_engine.calculators.holiday_calendar import HolidayCalendar
from earnings_engine.calculators.types import SalaryConfig, WorkStatus

logger = logging.getLogger(__name__)

MAX_WORKDAY_SCAN = 3650


class WorkdayPolicy:
    """Decides which dates are paid workdays and where an instant falls in the day.

    Classification order for a date:
    1. Weekday in ``work_days`` and not a holiday override -> workday
    2. Otherwise a compensated workday -> workday
    3. Otherwise -> not a workday
    """

    def __init__(
        self,
        config: SalaryConfig,
        calendar: HolidayCalendar,
        scan_limit: int = MAX_WORKDAY_SCAN,
    ):
        self.config = config
        self.calendar = calendar
        self.scan_limit = scan_limit

    def is_workday(self, day: date | datetime) -> bool:
        if weekday(day) in self.config.work_days and not self.calendar.is_holiday(day):
            return True
        return self.calendar.is_compensated_workday(day)

    def work_status(self, instant: datetime) -> WorkStatus:
        """Classify the instant's time of day. Boundaries belong to the later state."""
        if instant < at_time(instant, self.config.work_start):
            return WorkStatus.BEFORE_WORK
        if instant >= at_time(instant, self.config.work_end):
            return WorkStatus.AFTER_WORK

        lunch = self.config.lunch
        if lunch is not None:
            if at_time(instant, lunch.start) <= instant < at_time(instant, lunch.end):
                return WorkStatus.LUNCH_BREAK
        return WorkStatus.WORKING

    def next_workday(self, day: date | datetime) -> date | None:
        """First workday after ``day``, or None if none lies within the scan limit."""
        return self._scan(as_date(day), 1)

    def previous_workday(self, day: date | datetime) -> date | None:
        """Last workday before ``day``, or None if none lies within the scan limit."""
        return self._scan(as_date(day), -1)

    def _scan(self, origin: date, direction: int) -> date | None:
        current = origin
        for _ in range(self.scan_limit):
            try:
                current = current + ONE_DAY * direction
            except OverflowError:
                break
            if self.is_workday(current):
                return current

        logger.warning(
            "No workday found within %d days %s %s",
            self.scan_limit,
            "after" if direction > 0 else "before",
            origin.isoformat(),
        )
        return None
