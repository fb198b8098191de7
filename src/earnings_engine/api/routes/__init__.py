"""API routes."""

from earnings_engine.api.routes.config import router as config_router
from earnings_engine.api.routes.earnings import router as earnings_router
from earnings_engine.api.routes.health import router as health_router

__all__ = ["config_router", "earnings_router", "health_router"]
