"""JSON snapshot format for exporting and importing stored data.

Layout::

    {
      "salaryConfigs": [{"monthlySalary": "3000", "workStartTime": "09:00:00", ...}],
      "holidayConfigs": [{"date": "2024-01-01", "name": "...", "isWorkday": false, ...}]
    }

Timestamps are ISO 8601 text, amounts are decimal strings.
"""

from __future__ import annotations

import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from earnings_engine.calculators.types import (
    ConfigurationError,
    HolidayConfig,
    OvertimePolicy,
    SalaryConfig,
    TimeWindow,
)


class SnapshotModel(BaseModel):
    """Base for snapshot payloads: camelCase on the wire, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class SalaryConfigPayload(SnapshotModel):
    monthly_salary: Decimal
    work_start_time: datetime.time
    work_end_time: datetime.time
    lunch_start_time: datetime.time | None = None
    lunch_end_time: datetime.time | None = None
    work_days: list[int]
    overtime_rate: Decimal | None = None
    overtime_start_time: datetime.time | None = None
    overtime_end_time: datetime.time | None = None
    holiday_overtime_rate: Decimal | None = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @classmethod
    def from_domain(cls, config: SalaryConfig) -> SalaryConfigPayload:
        return cls(
            monthly_salary=config.monthly_salary,
            work_start_time=config.work_start,
            work_end_time=config.work_end,
            lunch_start_time=config.lunch.start if config.lunch else None,
            lunch_end_time=config.lunch.end if config.lunch else None,
            work_days=sorted(config.work_days),
            overtime_rate=config.overtime.rate if config.overtime else None,
            overtime_start_time=config.overtime.window.start if config.overtime else None,
            overtime_end_time=config.overtime.window.end if config.overtime else None,
            holiday_overtime_rate=config.holiday_overtime_rate,
            created_at=config.created_at,
            updated_at=config.updated_at,
        )

    def to_domain(self) -> SalaryConfig:
        """Build a validated SalaryConfig.

        Raises:
            ConfigurationError: If paired fields are half set or invariants fail
        """
        lunch_fields = (self.lunch_start_time, self.lunch_end_time)
        if any(v is None for v in lunch_fields) and any(v is not None for v in lunch_fields):
            raise ConfigurationError(
                "lunchStartTime and lunchEndTime must be set together", field="lunch"
            )
        overtime_fields = (self.overtime_rate, self.overtime_start_time, self.overtime_end_time)
        if any(v is None for v in overtime_fields) and any(
            v is not None for v in overtime_fields
        ):
            raise ConfigurationError(
                "overtimeRate, overtimeStartTime and overtimeEndTime must be set together",
                field="overtime",
            )

        lunch = None
        if self.lunch_start_time is not None and self.lunch_end_time is not None:
            lunch = TimeWindow(self.lunch_start_time, self.lunch_end_time)
        overtime = None
        if (
            self.overtime_rate is not None
            and self.overtime_start_time is not None
            and self.overtime_end_time is not None
        ):
            overtime = OvertimePolicy(
                window=TimeWindow(self.overtime_start_time, self.overtime_end_time),
                rate=self.overtime_rate,
            )

        config = SalaryConfig(
            monthly_salary=self.monthly_salary,
            work_start=self.work_start_time,
            work_end=self.work_end_time,
            lunch=lunch,
            work_days=frozenset(self.work_days),
            overtime=overtime,
            holiday_overtime_rate=self.holiday_overtime_rate,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
        config.validate()
        return config


class HolidayPayload(SnapshotModel):
    date: datetime.date
    name: str
    is_workday: bool = False
    created_at: datetime.datetime

    @classmethod
    def from_domain(cls, holiday: HolidayConfig) -> HolidayPayload:
        return cls(
            date=holiday.date,
            name=holiday.name,
            is_workday=holiday.is_workday,
            created_at=holiday.created_at,
        )

    def to_domain(self) -> HolidayConfig:
        return HolidayConfig(
            date=self.date,
            name=self.name,
            is_workday=self.is_workday,
            created_at=self.created_at,
        )


class Snapshot(SnapshotModel):
    salary_configs: list[SalaryConfigPayload]
    holiday_configs: list[HolidayPayload]


def encode_snapshot(
    configs: list[SalaryConfig], holidays: list[HolidayConfig]
) -> bytes:
    snapshot = Snapshot(
        salary_configs=[SalaryConfigPayload.from_domain(c) for c in configs],
        holiday_configs=[HolidayPayload.from_domain(h) for h in holidays],
    )
    return snapshot.model_dump_json(by_alias=True, indent=2).encode("utf-8")


def decode_snapshot(data: bytes | str) -> tuple[list[SalaryConfig], list[HolidayConfig]]:
    """Decode and validate a snapshot completely.

    Raises:
        pydantic.ValidationError: If the document does not match the layout
        ConfigurationError: If a salary config violates its invariants
    """
    snapshot = Snapshot.model_validate_json(data)
    configs = [payload.to_domain() for payload in snapshot.salary_configs]
    holidays = [payload.to_domain() for payload in snapshot.holiday_configs]
    return configs, holidays
