"""Earnings endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from earnings_engine.api.dependencies import Engine
from earnings_engine.api.schemas import (
    EarningsResponse,
    ErrorResponse,
    RangeEarningsResponse,
)
from earnings_engine.calculators import quantize_money

router = APIRouter(prefix="/earnings", tags=["earnings"])


def _wall_clock(value: datetime | None) -> datetime:
    """Naive local time. Aware inputs are converted to the server's zone."""
    if value is None:
        return datetime.now()
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


@router.get(
    "",
    response_model=EarningsResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def get_earnings(
    engine: Engine,
    at: Annotated[datetime | None, Query(description="Instant to evaluate, default now")] = None,
) -> EarningsResponse:
    """Today / month / year earnings and work status at an instant."""
    return EarningsResponse.from_snapshot(engine.snapshot(_wall_clock(at)))


@router.get(
    "/range",
    response_model=RangeEarningsResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_range_earnings(
    engine: Engine,
    start: Annotated[datetime, Query()],
    end: Annotated[datetime | None, Query(description="Default now")] = None,
) -> RangeEarningsResponse:
    """Earnings accrued between two instants."""
    start_at, end_at = _wall_clock(start), _wall_clock(end)
    if end_at < start_at:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Range end must not be before its start",
        )
    amount = engine.range_earnings(start_at, end_at)
    return RangeEarningsResponse(start=start_at, end=end_at, amount=quantize_money(amount))
