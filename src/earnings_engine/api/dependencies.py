"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from earnings_engine.calculators import EarningsEngine
from earnings_engine.config import get_settings
from earnings_engine.database import init_engine
from earnings_engine.providers import HolidayProvider, StaticHolidayProvider
from earnings_engine.services import ConfigStore


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    _, factory = init_engine()
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()


DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_store(db: DbSession) -> ConfigStore:
    """Configuration store bound to the request's session."""
    return ConfigStore(db)


def get_holiday_provider() -> HolidayProvider:
    """Holiday source used by the sync endpoint."""
    return StaticHolidayProvider()


Store = Annotated[ConfigStore, Depends(get_store)]
Provider = Annotated[HolidayProvider, Depends(get_holiday_provider)]


async def get_earnings_engine(store: Store) -> EarningsEngine:
    """Build an engine from the stored configuration and holidays."""
    config = await store.load()
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Salary configuration has not been set up",
        )
    holidays = await store.list_holidays()
    return EarningsEngine(config, holidays, scan_limit=get_settings().workday_scan_limit)


Engine = Annotated[EarningsEngine, Depends(get_earnings_engine)]
