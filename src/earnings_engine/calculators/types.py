"""Type definitions for the earnings calculation pipeline."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Any

from earnings_engine.calculators.calendar_math import seconds_of_day

# 0 = Sunday .. 6 = Saturday
ALL_WEEKDAYS = frozenset(range(7))
DEFAULT_WORK_DAYS = frozenset({1, 2, 3, 4, 5})

# Stored as NUMERIC(precision, DECIMAL_PLACES)
DECIMAL_PLACES = 4
SALARY_PRECISION = 14
RATE_PRECISION = 6


class ConfigurationError(Exception):
    """Raised when a salary configuration violates its invariants."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


def _check_decimal(value: Decimal, label: str, field: str, precision: int) -> None:
    """Reject amounts the storage columns cannot hold exactly."""
    if not value.is_finite():
        raise ConfigurationError(f"{label} must be a finite number, got {value}", field=field)
    if value.normalize().as_tuple().exponent < -DECIMAL_PLACES:
        raise ConfigurationError(
            f"{label} allows at most {DECIMAL_PLACES} decimal places, got {value}",
            field=field,
        )
    if abs(value) >= Decimal(10) ** (precision - DECIMAL_PLACES):
        raise ConfigurationError(f"{label} is too large, got {value}", field=field)


class WorkStatus(str, Enum):
    """Position of an instant within the working day."""

    BEFORE_WORK = "before_work"
    WORKING = "working"
    LUNCH_BREAK = "lunch_break"
    AFTER_WORK = "after_work"


@dataclass(frozen=True)
class TimeWindow:
    """A time-of-day range. Only hour and minute are significant."""

    start: datetime.time
    end: datetime.time

    @property
    def seconds(self) -> int:
        """Length of the window in seconds."""
        return seconds_of_day(self.end) - seconds_of_day(self.start)

    def validate(self, name: str) -> None:
        if seconds_of_day(self.start) >= seconds_of_day(self.end):
            raise ConfigurationError(
                f"{name} window must start before it ends "
                f"({self.start:%H:%M} >= {self.end:%H:%M})",
                field=name,
            )


@dataclass(frozen=True)
class OvertimePolicy:
    """Overtime window and the multiplier applied to base per-second pay."""

    window: TimeWindow
    rate: Decimal


@dataclass
class SalaryConfig:
    """Salary and working-hours configuration for one worker.

    Lunch and overtime are optional as a unit: either the whole window is
    configured or the feature is disabled.
    """

    monthly_salary: Decimal = Decimal("3000")
    work_start: datetime.time = datetime.time(9, 0)
    work_end: datetime.time = datetime.time(18, 0)
    lunch: TimeWindow | None = field(
        default_factory=lambda: TimeWindow(datetime.time(12, 0), datetime.time(13, 0))
    )
    work_days: frozenset[int] = DEFAULT_WORK_DAYS
    overtime: OvertimePolicy | None = None
    holiday_overtime_rate: Decimal | None = None
    created_at: datetime.datetime = field(default_factory=datetime.datetime.now)
    updated_at: datetime.datetime = field(default_factory=datetime.datetime.now)

    def __post_init__(self) -> None:
        self.work_days = frozenset(self.work_days)

    @property
    def daily_work_seconds(self) -> int:
        """Paid seconds in a full working day (work window minus lunch)."""
        total = seconds_of_day(self.work_end) - seconds_of_day(self.work_start)
        if self.lunch is not None:
            total -= self.lunch.seconds
        return total

    def validate(self) -> None:
        """Check invariants, raising ConfigurationError on the first violation."""
        _check_decimal(self.monthly_salary, "Monthly salary", "monthly_salary", SALARY_PRECISION)
        if self.monthly_salary < 0:
            raise ConfigurationError(
                f"Monthly salary must be non-negative, got {self.monthly_salary}",
                field="monthly_salary",
            )

        start, end = seconds_of_day(self.work_start), seconds_of_day(self.work_end)
        if start >= end:
            raise ConfigurationError(
                f"Work start {self.work_start:%H:%M} must be before "
                f"work end {self.work_end:%H:%M}",
                field="work_start",
            )

        if not self.work_days:
            raise ConfigurationError("At least one work day is required", field="work_days")
        invalid = sorted(d for d in self.work_days if d not in ALL_WEEKDAYS)
        if invalid:
            raise ConfigurationError(
                f"Work days must be in 0..6 (0 = Sunday), got {invalid}",
                field="work_days",
            )

        if self.lunch is not None:
            self.lunch.validate("lunch")
            if seconds_of_day(self.lunch.start) < start or seconds_of_day(self.lunch.end) > end:
                raise ConfigurationError(
                    "Lunch window must lie within the work window", field="lunch"
                )

        if self.overtime is not None:
            self.overtime.window.validate("overtime")
            if seconds_of_day(self.overtime.window.start) < end:
                raise ConfigurationError(
                    "Overtime window must start at or after work end", field="overtime"
                )
            _check_decimal(self.overtime.rate, "Overtime rate", "overtime", RATE_PRECISION)
            if self.overtime.rate < 1:
                raise ConfigurationError(
                    f"Overtime rate must be at least 1.0, got {self.overtime.rate}",
                    field="overtime",
                )

        if self.holiday_overtime_rate is not None:
            _check_decimal(
                self.holiday_overtime_rate,
                "Holiday overtime rate",
                "holiday_overtime_rate",
                RATE_PRECISION,
            )
            if self.holiday_overtime_rate < 1:
                raise ConfigurationError(
                    "Holiday overtime rate must be at least 1.0, "
                    f"got {self.holiday_overtime_rate}",
                    field="holiday_overtime_rate",
                )

    def update(self, **changes: Any) -> None:
        """Apply changes atomically: the result is validated before anything is set.

        Passing ``lunch=None`` or ``overtime=None`` disables that feature.
        """
        candidate = replace(self, **changes)
        candidate.validate()
        for name, value in changes.items():
            setattr(self, name, value)
        self.work_days = frozenset(self.work_days)
        self.updated_at = datetime.datetime.now()


@dataclass(frozen=True)
class HolidayConfig:
    """A special calendar date: a holiday override or a compensated workday."""

    date: datetime.date
    name: str
    is_workday: bool = False
    created_at: datetime.datetime = field(default_factory=datetime.datetime.now)

    # Storage-assigned identifier
    holiday_id: int | None = field(default=None, compare=False)

    def with_changes(
        self, name: str | None = None, is_workday: bool | None = None
    ) -> HolidayConfig:
        """Return a copy with name and/or workday flag changed. The date is fixed."""
        return replace(
            self,
            name=self.name if name is None else name,
            is_workday=self.is_workday if is_workday is None else is_workday,
        )
