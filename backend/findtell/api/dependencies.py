"""API Dependencies — builds request-scoped components from process-wide settings.

Invariants:
    - Settings come from the cached get_settings(); components receive values, not the env
    - The provider client is created once in the lifespan and shared via app.state
    - require_admin maps the pure gate outcome onto the typed error hierarchy:
      MISCONFIGURED → 500, UNAUTHORIZED → 401, FORBIDDEN → 403

Design Decisions:
    - FastAPI Depends over module globals: tests swap settings and the provider
      with app.dependency_overrides instead of mutating the environment
"""

import logging

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from findtell.config import Settings, get_settings
from findtell.core.admin_auth import authorize
from findtell.core.domain_types import AuthOutcome
from findtell.core.errors import (
    ConfigurationMissingError, ForbiddenError, UnauthorizedError,
)
from findtell.core.repository_protocols import LicenseProvider
from findtell.infrastructure.database import get_db
from findtell.infrastructure.kv_store import SqlKeyValueStore
from findtell.services.default_config_store import DefaultConfigStore
from findtell.services.license_validator import LicenseValidator

logger = logging.getLogger(__name__)

ADMIN_ACTOR = "admin"


def get_app_settings() -> Settings:
    return get_settings()


def get_default_store(db: AsyncSession = Depends(get_db)) -> DefaultConfigStore:
    return DefaultConfigStore(SqlKeyValueStore(db))


def get_license_provider(request: Request) -> LicenseProvider:
    return request.app.state.license_provider


def get_license_validator(
    provider: LicenseProvider = Depends(get_license_provider),
    settings: Settings = Depends(get_app_settings),
) -> LicenseValidator:
    return LicenseValidator(provider, settings.lemon_squeezy_product_id)


async def require_admin(
    request: Request,
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Gate for mutating admin routes. Returns the actor label on success."""
    outcome = authorize(authorization, settings.admin_token)
    if outcome is AuthOutcome.MISCONFIGURED:
        logger.error(
            "Admin token not configured",
            extra={"error_code": "CONFIGURATION_MISSING", "path": request.url.path},
        )
        raise ConfigurationMissingError(
            "admin_token", "Admin authentication not configured",
        )
    if outcome is AuthOutcome.UNAUTHORIZED:
        raise UnauthorizedError()
    if outcome is AuthOutcome.FORBIDDEN:
        raise ForbiddenError()
    return ADMIN_ACTOR
