"""SQL Key-Value Store — kv_entries upsert semantics on SQLite.

Tests cover:
    - missing keys read as None
    - JSON documents and raw strings round-trip
    - set overwrites the previous value for the same key
    - SQLAlchemy failures surface as StoreError
"""

import pytest
from sqlalchemy.exc import OperationalError

from findtell.core.errors import StoreError
from findtell.infrastructure.kv_store import SqlKeyValueStore


async def test_missing_key_is_none(sql_session):
    store = SqlKeyValueStore(sql_session)
    assert await store.get("default:line") is None


async def test_json_document_round_trips(sql_session):
    store = SqlKeyValueStore(sql_session)
    doc = {"chartType": "line", "configuration": {"nested": {"list": [1, 2]}}}
    await store.set("default:line", doc)
    assert await store.get("default:line") == doc


async def test_raw_string_round_trips(sql_session):
    store = SqlKeyValueStore(sql_session)
    await store.set("default:thumbnail:line", "<svg></svg>")
    assert await store.get("default:thumbnail:line") == "<svg></svg>"


async def test_set_overwrites(sql_session):
    store = SqlKeyValueStore(sql_session)
    await store.set("default:line", {"v": 1})
    await store.set("default:line", {"v": 2})
    assert await store.get("default:line") == {"v": 2}


async def test_database_failure_is_store_error(sql_session, monkeypatch):
    async def broken_get(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(sql_session, "get", broken_get)
    store = SqlKeyValueStore(sql_session)
    with pytest.raises(StoreError) as exc:
        await store.get("default:line")
    assert exc.value.operation == "get"
    assert "connection refused" not in exc.value.message
