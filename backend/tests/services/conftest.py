"""Service test fixtures — in-memory fakes and a SQLite-backed session.

Invariants:
    - Every SQL test gets a fresh in-memory SQLite database
    - kv and clock fixtures are fresh per test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, JSON column supported
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from findtell.db.base import Base
import findtell.models  # noqa: F401
from tests.services.fakes import InMemoryKeyValueStore, StepClock


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
async def sql_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()
