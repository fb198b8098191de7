"""Seed the database with a default salary configuration and holidays.

Usage:
    python -m scripts.seed_config [--salary AMOUNT] [--year YEAR] [--force]

Creates the tables if needed, stores a Mon-Fri 09:00-18:00 configuration
with a 12:00-13:00 lunch break, and syncs the built-in holiday calendar
for the given year.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

from earnings_engine.calculators import ConfigurationError, SalaryConfig
from earnings_engine.config import get_settings
from earnings_engine.database import dispose_db, get_session, init_db
from earnings_engine.providers import StaticHolidayProvider
from earnings_engine.services import ConfigStore


async def seed(salary: Decimal, year: int, force: bool) -> int:
    await init_db()
    try:
        async with get_session() as session:
            store = ConfigStore(session)
            existing = await store.load()
            if existing is not None and not force:
                print("Salary configuration already present; use --force to overwrite")
                return 1

            config = SalaryConfig(monthly_salary=salary)
            if existing is not None:
                config.created_at = existing.created_at
            await store.save(config)
            holidays = await store.sync_holidays(StaticHolidayProvider(), year)

        print(f"Stored salary configuration: {salary} per month")
        print(f"Synced {len(holidays)} holidays for {year}")
        return 0
    finally:
        await dispose_db()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed salary configuration and holidays")
    parser.add_argument("--salary", default="3000", help="Monthly salary (default 3000)")
    parser.add_argument("--year", type=int, default=date.today().year, help="Holiday year")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing config")
    args = parser.parse_args()

    try:
        salary = Decimal(args.salary)
    except InvalidOperation:
        parser.error(f"invalid salary: {args.salary}")

    print(f"Target database: {get_settings().database_url}")
    try:
        sys.exit(asyncio.run(seed(salary, args.year, args.force)))
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
