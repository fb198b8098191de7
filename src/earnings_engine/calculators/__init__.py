"""Workday and earnings calculation engine."""

from earnings_engine.calculators.earnings import (
    DivisionDegenerateError,
    EarningsEngine,
    EarningsSnapshot,
    quantize_money,
)
from earnings_engine.calculators.holiday_calendar import HolidayCalendar
from earnings_engine.calculators.types import (
    ConfigurationError,
    HolidayConfig,
    OvertimePolicy,
    SalaryConfig,
    TimeWindow,
    WorkStatus,
)
from earnings_engine.calculators.workday_policy import MAX_WORKDAY_SCAN, WorkdayPolicy

__all__ = [
    "ConfigurationError",
    "DivisionDegenerateError",
    "EarningsEngine",
    "EarningsSnapshot",
    "HolidayCalendar",
    "HolidayConfig",
    "MAX_WORKDAY_SCAN",
    "OvertimePolicy",
    "SalaryConfig",
    "TimeWindow",
    "WorkStatus",
    "WorkdayPolicy",
    "quantize_money",
]
