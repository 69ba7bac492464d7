"""Main FastAPI application for Padel Finder."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from padel_finder.config import ENVIRONMENT, VERSION
from padel_finder.rate_limit import limiter
from padel_finder.routers import day, health, venues
from padel_finder.services.registry import registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry.register_ayo()
    logger.info("Padel Finder %s started (%s)", VERSION, ENVIRONMENT)
    try:
        yield
    finally:
        await registry.stop()
        logger.info("Padel Finder stopped")


app = FastAPI(
    title="Padel Finder API",
    description="Normalized, cached padel court availability per venue and day",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(health.router)
app.include_router(venues.router)
app.include_router(day.router)
