"""Earnings calculation engine - real-time and cumulative pay."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from earnings_engine.calculators.calendar_math import (
    ONE_DAY,
    elapsed_since_midnight,
    iter_days,
    iter_month,
    seconds_of_day,
    start_of_day,
)
from earnings_engine.calculators.holiday_calendar import HolidayCalendar
from earnings_engine.calculators.types import (
    HolidayConfig,
    SalaryConfig,
    WorkStatus,
)
from earnings_engine.calculators.workday_policy import MAX_WORKDAY_SCAN, WorkdayPolicy

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")


class DivisionDegenerateError(Exception):
    """Raised when a pay rate would divide by zero workdays or zero work seconds."""

    def __init__(self, message: str, year: int | None = None, month: int | None = None):
        self.year = year
        self.month = month
        super().__init__(message)


def quantize_money(amount: Decimal) -> Decimal:
    """Round an amount to cents for display."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class EarningsSnapshot:
    """All figures for one instant, as shown by a ticking display.

    The per-second rate and the overtime figures built on it are None when
    the month has no workdays or the working day has no paid seconds.
    """

    instant: datetime
    status: WorkStatus
    is_workday: bool
    salary_per_second: Decimal | None
    today: Decimal
    month: Decimal
    year: Decimal
    overtime: Decimal | None
    holiday_overtime: Decimal | None
    next_holiday: HolidayConfig | None
    days_until_next_holiday: int | None
    next_workday: date | None


class EarningsEngine:
    """Computes earnings from a salary configuration and a holiday calendar.

    The engine works on a snapshot of the configuration taken at
    construction; build a new engine after the configuration or the
    holiday records change. Per-month workday counts are memoized for the
    lifetime of the engine.

    Pricing rules:
    - A workday pays ``monthly_salary / workdays in that day's month``
    - A partial day pays elapsed paid seconds at that day's per-second rate
    - Non-workdays pay nothing (holiday overtime is reported separately)
    """

    def __init__(
        self,
        config: SalaryConfig,
        holidays: HolidayCalendar | Iterable[HolidayConfig] = (),
        scan_limit: int = MAX_WORKDAY_SCAN,
    ):
        config.validate()
        self.config = replace(config)
        if isinstance(holidays, HolidayCalendar):
            self.calendar = holidays
        else:
            self.calendar = HolidayCalendar(holidays)
        self.policy = WorkdayPolicy(self.config, self.calendar, scan_limit=scan_limit)
        self._month_workdays: dict[tuple[int, int], int] = {}

    # ------------------------------------------------------------------
    # Rates
    # ------------------------------------------------------------------

    def daily_work_seconds(self) -> int:
        return self.config.daily_work_seconds

    def work_days_in_month(self, year: int, month: int) -> int:
        key = (year, month)
        if key not in self._month_workdays:
            self._month_workdays[key] = sum(
                1 for day in iter_month(year, month) if self.policy.is_workday(day)
            )
        return self._month_workdays[key]

    def work_days_in_year(self, year: int) -> int:
        return sum(self.work_days_in_month(year, month) for month in range(1, 13))

    def daily_salary(self, day: date | datetime) -> Decimal:
        """Pay for one full workday in the month containing ``day``."""
        workdays = self.work_days_in_month(day.year, day.month)
        if workdays == 0:
            raise DivisionDegenerateError(
                f"No workdays in {day.year}-{day.month:02d}; daily salary is undefined",
                year=day.year,
                month=day.month,
            )
        return self.config.monthly_salary / Decimal(workdays)

    def salary_per_second(self, day: date | datetime) -> Decimal:
        """Pay per working second in the month containing ``day``."""
        seconds = self.daily_work_seconds()
        if seconds <= 0:
            raise DivisionDegenerateError(
                "Daily work time is zero; per-second salary is undefined",
                year=day.year,
                month=day.month,
            )
        return self.daily_salary(day) / Decimal(seconds)

    # ------------------------------------------------------------------
    # Intra-day progress
    # ------------------------------------------------------------------

    def elapsed_paid_seconds(self, instant: datetime) -> Decimal:
        """Paid seconds worked so far on the instant's day, net of lunch."""
        now = elapsed_since_midnight(instant)
        work_start = seconds_of_day(self.config.work_start)
        if now < work_start:
            return ZERO
        if now >= seconds_of_day(self.config.work_end):
            return Decimal(self.daily_work_seconds())

        elapsed = now - work_start
        lunch = self.config.lunch
        if lunch is not None:
            lunch_start = seconds_of_day(lunch.start)
            lunch_end = seconds_of_day(lunch.end)
            if lunch_start <= now < lunch_end:
                elapsed = Decimal(lunch_start - work_start)
            elif now >= lunch_end:
                elapsed -= lunch.seconds
        return elapsed

    def work_status(self, instant: datetime) -> WorkStatus:
        return self.policy.work_status(instant)

    # ------------------------------------------------------------------
    # Cumulative earnings
    # ------------------------------------------------------------------

    def today_earnings(self, instant: datetime) -> Decimal:
        if not self.policy.is_workday(instant):
            return ZERO
        elapsed = self.elapsed_paid_seconds(instant)
        if not elapsed:
            return ZERO
        return elapsed * self.salary_per_second(instant)

    def month_earnings(self, instant: datetime) -> Decimal:
        """Full days from the 1st through yesterday, plus today's progress."""
        today = instant.date()
        worked_days = 0
        if today.day > 1:
            worked_days = sum(
                1
                for day in iter_days(today.replace(day=1), today - ONE_DAY)
                if self.policy.is_workday(day)
            )
        earned = self.daily_salary(today) * worked_days if worked_days else ZERO
        return earned + self.today_earnings(instant)

    def year_earnings(self, instant: datetime) -> Decimal:
        """Completed months at full pay, plus the current month so far."""
        earned = ZERO
        for month in range(1, instant.month):
            # A month with no workdays has nothing to pay out
            if self.work_days_in_month(instant.year, month):
                earned += self.config.monthly_salary
        return earned + self.month_earnings(instant)

    def range_earnings(
        self, start: date | datetime, end: date | datetime
    ) -> Decimal:
        """Earnings between two instants. Dates are taken as midnight.

        Each day is priced with its own month's daily salary, so ranges
        spanning several months or years never share a rate.
        """
        start_at = start if isinstance(start, datetime) else start_of_day(start)
        end_at = end if isinstance(end, datetime) else start_of_day(end)
        if end_at < start_at:
            raise ValueError(f"Range end {end_at} is before start {start_at}")

        first, last = start_at.date(), end_at.date()
        total = ZERO
        for day in iter_days(first, last):
            if not self.policy.is_workday(day):
                continue
            if first < day < last:
                total += self.daily_salary(day)
                continue

            if day == last:
                paid = self.elapsed_paid_seconds(end_at)
            else:
                paid = Decimal(self.daily_work_seconds())
            if day == first:
                paid -= self.elapsed_paid_seconds(start_at)
            if paid:
                total += paid * self.salary_per_second(day)
        return total

    # ------------------------------------------------------------------
    # Overtime
    # ------------------------------------------------------------------

    def overtime_seconds(self, instant: datetime) -> Decimal:
        """Seconds of the overtime window already elapsed after work end."""
        overtime = self.config.overtime
        if overtime is None:
            return ZERO

        now = elapsed_since_midnight(instant)
        window_start = max(
            seconds_of_day(self.config.work_end), seconds_of_day(overtime.window.start)
        )
        window_end = min(now, Decimal(seconds_of_day(overtime.window.end)))
        if window_end <= window_start:
            return ZERO
        return window_end - window_start

    def overtime_earnings(self, instant: datetime) -> Decimal:
        seconds = self.overtime_seconds(instant)
        if not seconds:
            return ZERO
        return seconds * self.salary_per_second(instant) * self.config.overtime.rate

    def holiday_overtime_seconds(self, day: date | datetime) -> int:
        """A full day's work seconds on a non-workday, 0 on a workday."""
        if self.policy.is_workday(day):
            return 0
        return self.daily_work_seconds()

    def holiday_overtime_earnings(self, day: date | datetime) -> Decimal:
        rate = self.config.holiday_overtime_rate
        seconds = self.holiday_overtime_seconds(day)
        if rate is None or not seconds:
            return ZERO
        return Decimal(seconds) * self.salary_per_second(day) * rate

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def snapshot(self, instant: datetime) -> EarningsSnapshot:
        today = instant.date()
        try:
            rate = self.salary_per_second(today)
        except DivisionDegenerateError as e:
            logger.debug("No per-second rate for %s: %s", today.isoformat(), e)
            rate = None

        overtime = holiday_overtime = None
        if rate is not None:
            overtime = self.overtime_earnings(instant)
            holiday_overtime = self.holiday_overtime_earnings(today)

        return EarningsSnapshot(
            instant=instant,
            status=self.policy.work_status(instant),
            is_workday=self.policy.is_workday(today),
            salary_per_second=rate,
            today=self.today_earnings(instant),
            month=self.month_earnings(instant),
            year=self.year_earnings(instant),
            overtime=overtime,
            holiday_overtime=holiday_overtime,
            next_holiday=self.calendar.next_holiday(today),
            days_until_next_holiday=self.calendar.days_until_next_holiday(today),
            next_workday=self.policy.next_workday(today),
        )
