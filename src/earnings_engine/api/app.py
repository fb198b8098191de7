"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from earnings_engine import __version__
from earnings_engine.api.routes import config_router, earnings_router, health_router
from earnings_engine.calculators import ConfigurationError, DivisionDegenerateError
from earnings_engine.database import dispose_db, init_db
from earnings_engine.providers import HolidayFetchError
from earnings_engine.services import DataImportError, RecordNotFoundError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create tables on startup, release connections on shutdown."""
    await init_db()
    yield
    await dispose_db()


def _error(status_code: int, code: str, exc: Exception, field: str | None = None) -> JSONResponse:
    content = {"detail": str(exc), "code": code}
    if field is not None:
        content["field"] = field
    return JSONResponse(status_code=status_code, content=content)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Earnings Engine API",
        description="Real-time and cumulative salary earnings",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        return _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY, "CONFIGURATION_ERROR", exc, exc.field
        )

    @app.exception_handler(DivisionDegenerateError)
    async def degenerate_rate_handler(
        request: Request, exc: DivisionDegenerateError
    ) -> JSONResponse:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "DEGENERATE_RATE", exc)

    @app.exception_handler(DataImportError)
    async def import_error_handler(request: Request, exc: DataImportError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, "IMPORT_ERROR", exc)

    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "NOT_FOUND", exc)

    @app.exception_handler(HolidayFetchError)
    async def holiday_fetch_handler(request: Request, exc: HolidayFetchError) -> JSONResponse:
        return _error(status.HTTP_502_BAD_GATEWAY, "HOLIDAY_FETCH_ERROR", exc)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(config_router, prefix="/api/v1")
    app.include_router(earnings_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
