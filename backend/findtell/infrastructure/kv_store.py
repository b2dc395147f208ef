"""SQL Key-Value Store — KeyValueStore protocol over the kv_entries table.

Invariants:
    - get returns the stored value verbatim, or None when the key was never set
    - set replaces the whole value and commits immediately (single-key atomic)
    - Every SQLAlchemy failure surfaces as StoreError; nothing is retried

Design Decisions:
    - session.merge for upsert: dialect-neutral (PostgreSQL in production, SQLite in tests);
      two first-time writers racing on one key may see an integrity error, which is
      reported as StoreError like any other write failure
"""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from findtell.core.domain_types import StoreKey
from findtell.core.errors import StoreError
from findtell.models.kv_entry import KVEntry

logger = logging.getLogger(__name__)


class SqlKeyValueStore:
    """Key-value access bound to one database session (one per request)."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, key: StoreKey) -> Any | None:
        try:
            entry = await self._session.get(KVEntry, key)
        except SQLAlchemyError as e:
            logger.error(f"KV get failed for {key}: {e}", extra={"operation": "get"})
            raise StoreError("Could not read key", "get")
        return entry.value if entry else None

    async def set(self, key: StoreKey, value: Any) -> None:
        try:
            await self._session.merge(KVEntry(key=key, value=value))
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"KV set failed for {key}: {e}", extra={"operation": "set"})
            raise StoreError("Could not write key", "set")
