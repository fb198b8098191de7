"""Salary configuration, holiday calendar and snapshot endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, Request, Response, status

from earnings_engine.api.dependencies import DbSession, Provider, Store
from earnings_engine.api.schemas import (
    ErrorResponse,
    HolidayCreate,
    HolidayListResponse,
    HolidayResponse,
    HolidaySyncResponse,
    HolidayUpdate,
    SalaryConfigResponse,
    SalaryConfigUpdate,
)
from earnings_engine.calculators import HolidayConfig, SalaryConfig

router = APIRouter(tags=["configuration"])


# ============================================================================
# Salary configuration
# ============================================================================


@router.get(
    "/config",
    response_model=SalaryConfigResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_config(store: Store) -> SalaryConfigResponse:
    """Get the stored salary configuration."""
    config = await store.load()
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Salary configuration has not been set up",
        )
    return SalaryConfigResponse.from_domain(config)


@router.put(
    "/config",
    response_model=SalaryConfigResponse,
    responses={422: {"model": ErrorResponse}},
)
async def put_config(
    db: DbSession,
    store: Store,
    payload: SalaryConfigUpdate,
) -> SalaryConfigResponse:
    """Create the salary configuration, or replace the existing one in place."""
    config = await store.load()
    if config is None:
        config = SalaryConfig(**payload.to_changes())
    else:
        config.update(**payload.to_changes())
    await store.save(config)
    await db.commit()
    return SalaryConfigResponse.from_domain(config)


# ============================================================================
# Holidays
# ============================================================================


@router.get("/holidays", response_model=HolidayListResponse)
async def list_holidays(
    store: Store,
    year: Annotated[int | None, Query(ge=1, le=9999)] = None,
) -> HolidayListResponse:
    """List holiday records, optionally limited to one year."""
    holidays = await store.list_holidays()
    if year is not None:
        holidays = [h for h in holidays if h.date.year == year]
    return HolidayListResponse(
        items=[HolidayResponse.from_domain(h) for h in holidays],
        total=len(holidays),
    )


@router.post(
    "/holidays",
    response_model=HolidayResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_holiday(
    db: DbSession,
    store: Store,
    payload: HolidayCreate,
) -> HolidayResponse:
    """Add a holiday override or a compensated workday."""
    holiday = await store.add_holiday(
        HolidayConfig(date=payload.date, name=payload.name, is_workday=payload.is_workday)
    )
    await db.commit()
    return HolidayResponse.from_domain(holiday)


@router.patch(
    "/holidays/{holiday_id}",
    response_model=HolidayResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_holiday(
    db: DbSession,
    store: Store,
    payload: HolidayUpdate,
    holiday_id: Annotated[int, Path(ge=1)],
) -> HolidayResponse:
    """Rename a holiday or change its workday flag."""
    holiday = await store.update_holiday(
        holiday_id, name=payload.name, is_workday=payload.is_workday
    )
    await db.commit()
    return HolidayResponse.from_domain(holiday)


@router.delete(
    "/holidays/{holiday_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_holiday(
    db: DbSession,
    store: Store,
    holiday_id: Annotated[int, Path(ge=1)],
) -> Response:
    await store.delete_holiday(holiday_id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/holidays/sync",
    response_model=HolidaySyncResponse,
    responses={502: {"model": ErrorResponse}},
)
async def sync_holidays(
    db: DbSession,
    store: Store,
    provider: Provider,
    year: Annotated[int | None, Query(ge=1, le=9999)] = None,
) -> HolidaySyncResponse:
    """Replace a year's holiday records with the provider's calendar."""
    target_year = year if year is not None else date.today().year
    holidays = await store.sync_holidays(provider, target_year)
    await db.commit()
    return HolidaySyncResponse(
        year=target_year,
        provider=provider.provider_name,
        items=[HolidayResponse.from_domain(h) for h in holidays],
        total=len(holidays),
    )


# ============================================================================
# Snapshot export / import
# ============================================================================


@router.get("/snapshot")
async def export_snapshot(store: Store) -> Response:
    """Download every stored record as a JSON snapshot."""
    data = await store.export_snapshot()
    return Response(
        content=data,
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="earnings-snapshot.json"'},
    )


@router.post(
    "/snapshot",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}},
)
async def import_snapshot(db: DbSession, store: Store, request: Request) -> Response:
    """Replace every stored record with an uploaded snapshot."""
    await store.import_snapshot(await request.body())
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
