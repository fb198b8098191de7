"""Pydantic schemas for API request/response models."""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from earnings_engine.calculators import (
    EarningsSnapshot,
    HolidayConfig,
    OvertimePolicy,
    SalaryConfig,
    TimeWindow,
    WorkStatus,
    quantize_money,
)


# ============================================================================
# Salary configuration schemas
# ============================================================================


class TimeWindowSchema(BaseModel):
    """A time-of-day window such as the lunch break."""

    start: datetime.time
    end: datetime.time


class OvertimeSchema(BaseModel):
    """Overtime window with its pay multiplier."""

    start: datetime.time
    end: datetime.time
    rate: Decimal = Field(ge=1)


class SalaryConfigUpdate(BaseModel):
    """Schema for creating or replacing the salary configuration."""

    monthly_salary: Decimal = Field(ge=0)
    work_start: datetime.time
    work_end: datetime.time
    lunch: TimeWindowSchema | None = None
    work_days: list[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5])
    overtime: OvertimeSchema | None = None
    holiday_overtime_rate: Decimal | None = Field(default=None, ge=1)

    def to_changes(self) -> dict[str, Any]:
        """Keyword arguments for ``SalaryConfig`` / ``SalaryConfig.update``."""
        return {
            "monthly_salary": self.monthly_salary,
            "work_start": self.work_start,
            "work_end": self.work_end,
            "lunch": TimeWindow(self.lunch.start, self.lunch.end) if self.lunch else None,
            "work_days": frozenset(self.work_days),
            "overtime": (
                OvertimePolicy(
                    window=TimeWindow(self.overtime.start, self.overtime.end),
                    rate=self.overtime.rate,
                )
                if self.overtime
                else None
            ),
            "holiday_overtime_rate": self.holiday_overtime_rate,
        }


class SalaryConfigResponse(BaseModel):
    """Schema for the stored salary configuration."""

    monthly_salary: Decimal
    work_start: datetime.time
    work_end: datetime.time
    lunch: TimeWindowSchema | None
    work_days: list[int]
    overtime: OvertimeSchema | None
    holiday_overtime_rate: Decimal | None
    daily_work_seconds: int
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @classmethod
    def from_domain(cls, config: SalaryConfig) -> SalaryConfigResponse:
        return cls(
            monthly_salary=config.monthly_salary,
            work_start=config.work_start,
            work_end=config.work_end,
            lunch=(
                TimeWindowSchema(start=config.lunch.start, end=config.lunch.end)
                if config.lunch
                else None
            ),
            work_days=sorted(config.work_days),
            overtime=(
                OvertimeSchema(
                    start=config.overtime.window.start,
                    end=config.overtime.window.end,
                    rate=config.overtime.rate,
                )
                if config.overtime
                else None
            ),
            holiday_overtime_rate=config.holiday_overtime_rate,
            daily_work_seconds=config.daily_work_seconds,
            created_at=config.created_at,
            updated_at=config.updated_at,
        )


# ============================================================================
# Holiday schemas
# ============================================================================


class HolidayCreate(BaseModel):
    """Schema for adding a holiday or compensated workday."""

    date: datetime.date
    name: str = Field(min_length=1)
    is_workday: bool = False


class HolidayUpdate(BaseModel):
    """Schema for renaming a holiday or flipping its workday flag."""

    name: str | None = Field(default=None, min_length=1)
    is_workday: bool | None = None


class HolidayResponse(BaseModel):
    """Schema for a stored holiday record."""

    model_config = ConfigDict(from_attributes=True)

    holiday_id: int | None
    date: datetime.date
    name: str
    is_workday: bool
    created_at: datetime.datetime

    @classmethod
    def from_domain(cls, holiday: HolidayConfig) -> HolidayResponse:
        return cls.model_validate(holiday)


class HolidayListResponse(BaseModel):
    """Schema for listing holidays."""

    items: list[HolidayResponse]
    total: int


class HolidaySyncResponse(BaseModel):
    """Schema for a holiday sync result."""

    year: int
    provider: str
    items: list[HolidayResponse]
    total: int


# ============================================================================
# Earnings schemas
# ============================================================================


def _money_or_none(amount: Decimal | None) -> Decimal | None:
    return quantize_money(amount) if amount is not None else None


class EarningsResponse(BaseModel):
    """Earnings figures for one instant. Amounts are rounded to cents.

    The rate and overtime fields are null in a month with no workdays.
    """

    at: datetime.datetime
    status: WorkStatus
    is_workday: bool
    salary_per_second: Decimal | None = None
    today: Decimal
    month: Decimal
    year: Decimal
    overtime: Decimal | None = None
    holiday_overtime: Decimal | None = None
    next_holiday: HolidayResponse | None = None
    days_until_next_holiday: int | None = None
    next_workday: datetime.date | None = None

    @classmethod
    def from_snapshot(cls, snapshot: EarningsSnapshot) -> EarningsResponse:
        return cls(
            at=snapshot.instant,
            status=snapshot.status,
            is_workday=snapshot.is_workday,
            salary_per_second=snapshot.salary_per_second,
            today=quantize_money(snapshot.today),
            month=quantize_money(snapshot.month),
            year=quantize_money(snapshot.year),
            overtime=_money_or_none(snapshot.overtime),
            holiday_overtime=_money_or_none(snapshot.holiday_overtime),
            next_holiday=(
                HolidayResponse.from_domain(snapshot.next_holiday)
                if snapshot.next_holiday
                else None
            ),
            days_until_next_holiday=snapshot.days_until_next_holiday,
            next_workday=snapshot.next_workday,
        )


class RangeEarningsResponse(BaseModel):
    """Earnings between two instants."""

    start: datetime.datetime
    end: datetime.datetime
    amount: Decimal


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str
    field: str | None = None
