"""FindTell API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map FindTellError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and the license provider client created once on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Provider client on app.state: one connection pool per process, injected into
      LicenseValidator per request through api/dependencies.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from findtell.api.error_handlers import register_error_handlers
from findtell.api.routes import admin_defaults, health, license, webhooks
from findtell.config import get_settings
from findtell.infrastructure import database
from findtell.infrastructure.lemon_squeezy_client import LemonSqueezyClient
from findtell.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.license_provider = LemonSqueezyClient(
        settings.lemon_squeezy_api_key,
        base_url=settings.lemon_squeezy_api_url,
        timeout_seconds=settings.lemon_squeezy_timeout_seconds,
    )
    if not settings.admin_token:
        logger.warning("ADMIN_TOKEN not set: admin saves will be refused")
    logger.info("FindTell API started")
    yield
    await app.state.license_provider.aclose()
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("FindTell API shutting down")


app = FastAPI(
    title="FindTell API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Signature"],
)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(admin_defaults.router)
app.include_router(license.router)
app.include_router(webhooks.router)

register_error_handlers(app)
