"""API test fixtures — FastAPI test client over SQLite with fixture secrets.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db overridden to use the test session factory
    - Settings injected via get_app_settings override, never via os.environ
    - The real LemonSqueezyClient runs on httpx.MockTransport; tests set
      provider["handler"] to script the provider's replies

Design Decisions:
    - db_manager patched so the readiness probe sees the test engine
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from findtell.api.dependencies import get_app_settings, get_license_provider
from findtell.config import Settings
from findtell.db.base import Base
from findtell.infrastructure.database import get_db, DatabaseSessionManager
from findtell.infrastructure.lemon_squeezy_client import LemonSqueezyClient
import findtell.infrastructure.database as db_module
import findtell.models  # noqa: F401
from findtell.main import app

ADMIN_TOKEN = "right"
PRODUCT_ID = "42"
WEBHOOK_SECRET = "whsec-test"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        admin_token=ADMIN_TOKEN,
        lemon_squeezy_api_key="ls-test-key",
        lemon_squeezy_product_id=PRODUCT_ID,
        lemon_squeezy_api_url="https://api.lemonsqueezy.test/v1",
        lemon_squeezy_webhook_secret=WEBHOOK_SECRET,
    )


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def provider():
    """Scriptable provider: set provider["handler"]; requests land in provider["requests"]."""
    state = {
        "handler": lambda request: httpx.Response(500, json={"error": "unscripted"}),
        "requests": [],
    }

    def dispatch(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["handler"](request)

    state["transport"] = httpx.MockTransport(dispatch)
    return state


@pytest.fixture
async def client(test_engine, test_session_factory, settings, provider):
    """FastAPI test client with DB, settings, and provider overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    http = httpx.AsyncClient(
        base_url=settings.lemon_squeezy_api_url, transport=provider["transport"],
    )
    ls_client = LemonSqueezyClient(settings.lemon_squeezy_api_key, http_client=http)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_app_settings] = lambda: settings
    app.dependency_overrides[get_license_provider] = lambda: ls_client

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    await http.aclose()
