"""Salary configuration and holiday calendar models."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import JSON, Boolean, CheckConstraint, Date, DateTime, Numeric, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from earnings_engine.calculators.types import (
    DECIMAL_PLACES,
    RATE_PRECISION,
    SALARY_PRECISION,
    HolidayConfig,
    OvertimePolicy,
    SalaryConfig,
    TimeWindow,
)
from earnings_engine.models.base import Base, TimestampMixin


class SalaryConfigRecord(Base, TimestampMixin):
    """Stored salary configuration. Paired windows are flattened into nullable columns."""

    __tablename__ = "salary_config"

    salary_config_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    monthly_salary: Mapped[Decimal] = mapped_column(
        Numeric(SALARY_PRECISION, DECIMAL_PLACES), nullable=False
    )
    work_start: Mapped[time] = mapped_column(Time, nullable=False)
    work_end: Mapped[time] = mapped_column(Time, nullable=False)
    lunch_start: Mapped[time | None] = mapped_column(Time, nullable=True)
    lunch_end: Mapped[time | None] = mapped_column(Time, nullable=True)
    work_days: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    overtime_rate: Mapped[Decimal | None] = mapped_column(
        Numeric(RATE_PRECISION, DECIMAL_PLACES), nullable=True
    )
    overtime_start: Mapped[time | None] = mapped_column(Time, nullable=True)
    overtime_end: Mapped[time | None] = mapped_column(Time, nullable=True)
    holiday_overtime_rate: Mapped[Decimal | None] = mapped_column(
        Numeric(RATE_PRECISION, DECIMAL_PLACES), nullable=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=datetime.now, nullable=False
    )

    __table_args__ = (
        CheckConstraint("monthly_salary >= 0", name="salary_config_salary_check"),
        CheckConstraint(
            "(lunch_start IS NULL) = (lunch_end IS NULL)",
            name="salary_config_lunch_pair_check",
        ),
        CheckConstraint(
            "(overtime_start IS NULL) = (overtime_end IS NULL) "
            "AND (overtime_start IS NULL) = (overtime_rate IS NULL)",
            name="salary_config_overtime_check",
        ),
    )

    @classmethod
    def from_domain(cls, config: SalaryConfig) -> SalaryConfigRecord:
        record = cls()
        record.apply(config)
        return record

    def apply(self, config: SalaryConfig) -> None:
        """Copy every field of a domain config onto this record."""
        self.monthly_salary = config.monthly_salary
        self.work_start = config.work_start
        self.work_end = config.work_end
        self.lunch_start = config.lunch.start if config.lunch else None
        self.lunch_end = config.lunch.end if config.lunch else None
        self.work_days = sorted(config.work_days)
        if config.overtime is not None:
            self.overtime_rate = config.overtime.rate
            self.overtime_start = config.overtime.window.start
            self.overtime_end = config.overtime.window.end
        else:
            self.overtime_rate = None
            self.overtime_start = None
            self.overtime_end = None
        self.holiday_overtime_rate = config.holiday_overtime_rate
        self.created_at = config.created_at
        self.updated_at = config.updated_at

    def to_domain(self) -> SalaryConfig:
        lunch = None
        if self.lunch_start is not None and self.lunch_end is not None:
            lunch = TimeWindow(self.lunch_start, self.lunch_end)

        overtime = None
        if (
            self.overtime_rate is not None
            and self.overtime_start is not None
            and self.overtime_end is not None
        ):
            overtime = OvertimePolicy(
                window=TimeWindow(self.overtime_start, self.overtime_end),
                rate=self.overtime_rate,
            )

        return SalaryConfig(
            monthly_salary=self.monthly_salary,
            work_start=self.work_start,
            work_end=self.work_end,
            lunch=lunch,
            work_days=frozenset(self.work_days),
            overtime=overtime,
            holiday_overtime_rate=self.holiday_overtime_rate,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class HolidayRecord(Base, TimestampMixin):
    """Stored holiday override or compensated workday."""

    __tablename__ = "holiday_config"

    holiday_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    holiday_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    is_workday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @classmethod
    def from_domain(cls, holiday: HolidayConfig) -> HolidayRecord:
        return cls(
            holiday_date=holiday.date,
            name=holiday.name,
            is_workday=holiday.is_workday,
            created_at=holiday.created_at,
        )

    def to_domain(self) -> HolidayConfig:
        return HolidayConfig(
            date=self.holiday_date,
            name=self.name,
            is_workday=self.is_workday,
            created_at=self.created_at,
            holiday_id=self.holiday_id,
        )
