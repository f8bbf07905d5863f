"""FastAPI application factory for the commission analytics API."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from .. import __version__
from ..config import settings
from .routes.commissions import router as commissions_router
from .routes.health import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logging.basicConfig(level=settings.log_level)
    logger.info(f"Starting commission analytics API (data_dir={settings.data_dir})")
    yield
    logger.info("Commission analytics API shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Commission Analytics API",
        description="Commission reports, forecasts and distributions for agency dashboards",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(health_router)
    app.include_router(commissions_router)

    return app
