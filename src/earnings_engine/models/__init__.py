"""ORM models."""

from earnings_engine.models.base import Base, TimestampMixin
from earnings_engine.models.salary import HolidayRecord, SalaryConfigRecord

__all__ = [
    "Base",
    "HolidayRecord",
    "SalaryConfigRecord",
    "TimestampMixin",
]
