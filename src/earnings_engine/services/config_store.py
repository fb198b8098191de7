"""Persistence for the salary configuration and holiday calendar."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from earnings_engine.calculators.types import ConfigurationError, HolidayConfig, SalaryConfig
from earnings_engine.models import HolidayRecord, SalaryConfigRecord
from earnings_engine.services.snapshot import decode_snapshot, encode_snapshot

if TYPE_CHECKING:
    from earnings_engine.providers.base import HolidayProvider

logger = logging.getLogger(__name__)


class DataImportError(Exception):
    """Raised when a snapshot cannot be imported. Existing data is left untouched."""


class RecordNotFoundError(Exception):
    """Raised when a holiday record does not exist."""

    def __init__(self, holiday_id: int):
        self.holiday_id = holiday_id
        super().__init__(f"Holiday {holiday_id} not found")


class ConfigStore:
    """Store for the single salary configuration and its holiday records.

    The store flushes but never commits; the caller owns the transaction
    (see ``database.get_session``).
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # ------------------------------------------------------------------
    # Salary configuration
    # ------------------------------------------------------------------

    async def load(self) -> SalaryConfig | None:
        record = await self._current_record()
        return record.to_domain() if record else None

    async def save(self, config: SalaryConfig) -> None:
        """Insert or replace the salary configuration.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config.validate()
        record = await self._current_record()
        if record is None:
            self.session.add(SalaryConfigRecord.from_domain(config))
        else:
            record.apply(config)
        await self.session.flush()

    async def list_salary_configs(self) -> list[SalaryConfig]:
        result = await self.session.execute(
            select(SalaryConfigRecord).order_by(SalaryConfigRecord.salary_config_id)
        )
        return [r.to_domain() for r in result.scalars().all()]

    async def _current_record(self) -> SalaryConfigRecord | None:
        result = await self.session.execute(
            select(SalaryConfigRecord).order_by(SalaryConfigRecord.salary_config_id).limit(1)
        )
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # Holidays
    # ------------------------------------------------------------------

    async def list_holidays(self) -> list[HolidayConfig]:
        result = await self.session.execute(
            select(HolidayRecord).order_by(HolidayRecord.holiday_date, HolidayRecord.holiday_id)
        )
        return [r.to_domain() for r in result.scalars().all()]

    async def add_holiday(self, holiday: HolidayConfig) -> HolidayConfig:
        record = HolidayRecord.from_domain(holiday)
        self.session.add(record)
        await self.session.flush()
        return record.to_domain()

    async def update_holiday(
        self,
        holiday_id: int,
        name: str | None = None,
        is_workday: bool | None = None,
    ) -> HolidayConfig:
        """Change a holiday's name or workday flag. Its date cannot change."""
        record = await self._get_holiday(holiday_id)
        updated = record.to_domain().with_changes(name=name, is_workday=is_workday)
        record.name = updated.name
        record.is_workday = updated.is_workday
        await self.session.flush()
        return record.to_domain()

    async def delete_holiday(self, holiday_id: int) -> None:
        record = await self._get_holiday(holiday_id)
        await self.session.delete(record)
        await self.session.flush()

    async def sync_holidays(self, provider: HolidayProvider, year: int) -> list[HolidayConfig]:
        """Replace the records of ``year`` with the provider's calendar.

        The provider is queried first, so a failed fetch leaves the stored
        records as they were.
        """
        fetched = await provider.fetch_holidays(year)
        await self.session.execute(
            delete(HolidayRecord).where(
                HolidayRecord.holiday_date >= date(year, 1, 1),
                HolidayRecord.holiday_date <= date(year, 12, 31),
            )
        )
        records = [HolidayRecord.from_domain(h) for h in fetched]
        self.session.add_all(records)
        await self.session.flush()
        logger.info(
            "Synced %d holiday records for %d from %s",
            len(records),
            year,
            provider.provider_name,
        )
        return [r.to_domain() for r in sorted(records, key=lambda r: r.holiday_date)]

    async def _get_holiday(self, holiday_id: int) -> HolidayRecord:
        record = await self.session.get(HolidayRecord, holiday_id)
        if record is None:
            raise RecordNotFoundError(holiday_id)
        return record

    # ------------------------------------------------------------------
    # Snapshot import / export
    # ------------------------------------------------------------------

    async def reset(self) -> None:
        """Delete every stored record."""
        await self.session.execute(delete(HolidayRecord))
        await self.session.execute(delete(SalaryConfigRecord))
        await self.session.flush()

    async def export_snapshot(self) -> bytes:
        configs = await self.list_salary_configs()
        holidays = await self.list_holidays()
        logger.info(
            "Exporting snapshot with %d salary configs and %d holidays",
            len(configs),
            len(holidays),
        )
        return encode_snapshot(configs, holidays)

    async def import_snapshot(self, data: bytes | str) -> None:
        """Replace all stored records with the snapshot's contents.

        The snapshot is decoded and validated in full before anything is
        deleted. If writing fails the session is rolled back.

        Raises:
            DataImportError: If the snapshot is malformed or cannot be written
        """
        try:
            configs, holidays = decode_snapshot(data)
        except (ValidationError, ConfigurationError) as e:
            raise DataImportError(f"Invalid snapshot: {e}") from e

        try:
            await self.reset()
            self.session.add_all([SalaryConfigRecord.from_domain(c) for c in configs])
            self.session.add_all([HolidayRecord.from_domain(h) for h in holidays])
            await self.session.flush()
        except Exception as e:
            await self.session.rollback()
            raise DataImportError(f"Failed to write snapshot: {e}") from e

        logger.info(
            "Imported snapshot with %d salary configs and %d holidays",
            len(configs),
            len(holidays),
        )
