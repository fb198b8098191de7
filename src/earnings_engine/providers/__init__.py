"""Holiday calendar providers."""

from earnings_engine.providers.base import HolidayFetchError, HolidayProvider
from earnings_engine.providers.static import StaticHolidayProvider

__all__ = [
    "HolidayFetchError",
    "HolidayProvider",
    "StaticHolidayProvider",
]
