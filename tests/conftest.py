"""Pytest fixtures for earnings engine tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import date, time
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from earnings_engine.api.app import create_app
from earnings_engine.api.dependencies import get_db_session
from earnings_engine.calculators import (
    EarningsEngine,
    HolidayConfig,
    OvertimePolicy,
    SalaryConfig,
    TimeWindow,
)
from earnings_engine.models import Base
from earnings_engine.services import ConfigStore

# One shared in-memory SQLite connection per test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def salary_config() -> SalaryConfig:
    """Mon-Fri 09:00-18:00 with a 12:00-13:00 lunch, 21000 per month."""
    return SalaryConfig(
        monthly_salary=Decimal("21000"),
        work_start=time(9, 0),
        work_end=time(18, 0),
        lunch=TimeWindow(time(12, 0), time(13, 0)),
    )


@pytest.fixture
def overtime_config(salary_config) -> SalaryConfig:
    salary_config.overtime = OvertimePolicy(
        window=TimeWindow(time(18, 0), time(21, 0)),
        rate=Decimal("1.5"),
    )
    salary_config.holiday_overtime_rate = Decimal("2")
    return salary_config


@pytest.fixture
def march_holidays() -> list[HolidayConfig]:
    """Friday 2024-03-08 off, Saturday 2024-03-09 worked instead."""
    return [
        HolidayConfig(date=date(2024, 3, 8), name="Spring Break"),
        HolidayConfig(date=date(2024, 3, 9), name="Make-up Day", is_workday=True),
    ]


@pytest.fixture
def engine(salary_config, march_holidays) -> EarningsEngine:
    return EarningsEngine(salary_config, march_holidays)


@pytest.fixture
def plain_engine(salary_config) -> EarningsEngine:
    """Engine with no holiday records."""
    return EarningsEngine(salary_config)


# ============================================================================
# Database fixtures
# ============================================================================


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def store(session) -> ConfigStore:
    return ConfigStore(session)


@pytest_asyncio.fixture
async def client(session) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the test session."""
    app = create_app()

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_db_session] = override_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
