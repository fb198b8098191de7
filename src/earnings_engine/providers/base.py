"""Base protocol for holiday calendar providers.

A provider supplies the official holiday list for a year. The engine never
calls providers itself; the application fetches and stores the records
(see ``ConfigStore.sync_holidays``).
"""

from __future__ import annotations

from typing import Protocol

from earnings_engine.calculators.types import HolidayConfig


class HolidayFetchError(Exception):
    """Raised when a provider cannot deliver a holiday list."""

    def __init__(self, provider_name: str, year: int, reason: str):
        self.provider_name = provider_name
        self.year = year
        self.reason = reason
        super().__init__(f"{provider_name} could not fetch holidays for {year}: {reason}")


class HolidayProvider(Protocol):
    """Protocol for holiday calendar sources."""

    provider_name: str

    async def fetch_holidays(self, year: int) -> list[HolidayConfig]:
        """Return holiday and compensated-workday records for ``year``.

        Raises:
            HolidayFetchError: If the source is unreachable or its data is unusable
        """
        ...
