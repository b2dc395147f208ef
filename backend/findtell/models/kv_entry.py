"""KV Entry ORM — one row per key of the key-value store.

Invariants:
    - key is the primary key: one value per key, a save replaces the row's value
    - value is any JSON document or a raw string (thumbnails)
    - No delete path: absence of a row is "not found"

Design Decisions:
    - Single generic table over one table per record kind: record kinds are kept
      apart by key namespaces (services/default_config_store.py), mirroring a
      hosted KV service
    - updated_at is row bookkeeping only; DefaultConfiguration carries its own updatedAt
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from findtell.db.base import Base


class KVEntry(Base):
    """A single key-value pair."""
    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
