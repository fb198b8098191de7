"""Static holiday provider for local use and testing.

Replace with an adapter for an official holiday feed in production.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import MAXYEAR, MINYEAR, date

from earnings_engine.calculators.types import HolidayConfig
from earnings_engine.providers.base import HolidayFetchError

logger = logging.getLogger(__name__)

# (month, day, name) repeated every year
DEFAULT_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "New Year's Day"),
    (2, 10, "Spring Festival"),
    (2, 11, "Spring Festival"),
    (2, 12, "Spring Festival"),
    (2, 13, "Spring Festival"),
    (2, 14, "Spring Festival"),
    (2, 15, "Spring Festival"),
    (4, 4, "Qingming Festival"),
    (5, 1, "Labour Day"),
    (6, 10, "Dragon Boat Festival"),
    (9, 15, "Mid-Autumn Festival"),
    (10, 1, "National Day"),
    (10, 2, "National Day"),
    (10, 3, "National Day"),
)


class StaticHolidayProvider:
    """Provider serving a fixed month/day calendar plus optional extra records."""

    provider_name = "static"

    def __init__(
        self,
        holidays: Iterable[tuple[int, int, str]] = DEFAULT_HOLIDAYS,
        extra: Iterable[HolidayConfig] = (),
    ):
        """Initialize static provider.

        Args:
            holidays: (month, day, name) entries applied to every year
            extra: Dated records (e.g. compensated workdays) returned for their own year
        """
        self.holidays = tuple(holidays)
        self.extra = tuple(extra)

    async def fetch_holidays(self, year: int) -> list[HolidayConfig]:
        if not MINYEAR <= year <= MAXYEAR:
            raise HolidayFetchError(self.provider_name, year, "year out of range")

        records: list[HolidayConfig] = []
        for month, day, name in self.holidays:
            try:
                records.append(HolidayConfig(date=date(year, month, day), name=name))
            except ValueError as e:
                raise HolidayFetchError(
                    self.provider_name, year, f"invalid date {month}-{day}: {e}"
                ) from e
        records.extend(h for h in self.extra if h.date.year == year)

        logger.debug("Static provider returned %d records for %d", len(records), year)
        return sorted(records, key=lambda h: h.date)
