"""Admin Default Routes — save/read defaults and thumbnails over HTTP.

Invariants:
    - save-default: 500 when no admin token configured, 401 without Bearer, 403 on mismatch
    - Auth failures never write to the store
    - A save rejected for its thumbnail leaves the stored configuration untouched
    - Store failures surface as 503 STORE_ERROR envelopes
    - get-default / get-thumbnail: 404 {success: false} for never-saved chart types
    - get-thumbnail returns normalized SVG as image/svg+xml with a 1-hour cache directive
"""

import pytest

from findtell.api.dependencies import get_app_settings, get_default_store
from findtell.main import app
from findtell.services.default_config_store import DefaultConfigStore
from tests.services.fakes import InMemoryKeyValueStore

CONFIG = {"title": "Revenue", "series": [{"name": "A", "color": "#123456"}]}
GOOD = {"Authorization": "Bearer right"}


async def _save(client, headers=GOOD, **body):
    payload = {"chartType": "line", "configuration": CONFIG}
    payload.update(body)
    return await client.post("/api/admin/save-default", json=payload, headers=headers)


# ─── auth gate ───────────────────────────────────────────────────

async def test_save_without_header_is_401(client):
    res = await _save(client, headers={})
    assert res.status_code == 401
    assert res.json()["success"] is False
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_save_with_non_bearer_header_is_401(client):
    res = await _save(client, headers={"Authorization": "Basic right"})
    assert res.status_code == 401


async def test_save_with_wrong_token_is_403(client):
    res = await _save(client, headers={"Authorization": "Bearer wrong"})
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"


async def test_save_without_configured_token_is_500(client, settings):
    app.dependency_overrides[get_app_settings] = lambda: settings.model_copy(
        update={"admin_token": None},
    )
    res = await _save(client)
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "CONFIGURATION_MISSING"
    assert res.json()["error"]["message"] == "Admin authentication not configured"


async def test_rejected_save_does_not_write(client):
    await _save(client, headers={"Authorization": "Bearer wrong"})
    res = await client.get("/api/admin/get-default", params={"chartType": "line"})
    assert res.status_code == 404


# ─── save + read ─────────────────────────────────────────────────

async def test_save_then_get_default(client):
    res = await _save(client)
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "message": "Default configuration saved for line",
        "chartType": "line",
        "thumbnailSaved": False,
    }

    res = await client.get("/api/admin/get-default", params={"chartType": "line"})
    body = res.json()
    assert res.status_code == 200
    assert body["success"] is True
    assert body["chartType"] == "line"
    assert body["configuration"] == CONFIG
    assert body["updatedBy"] == "admin"
    assert body["updatedAt"]


async def test_second_save_overwrites(client):
    await _save(client, configuration={"v": 1, "keep": True})
    first = (await client.get("/api/admin/get-default", params={"chartType": "line"})).json()
    await _save(client, configuration={"v": 2})
    second = (await client.get("/api/admin/get-default", params={"chartType": "line"})).json()

    assert second["configuration"] == {"v": 2}
    assert second["updatedAt"] >= first["updatedAt"]


async def test_get_default_never_saved_is_404_value(client):
    res = await client.get("/api/admin/get-default", params={"chartType": "pie"})
    assert res.status_code == 404
    assert res.json() == {
        "success": False,
        "error": "No default configuration found for pie",
        "chartType": "pie",
    }


async def test_get_default_requires_chart_type(client):
    res = await client.get("/api/admin/get-default")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("configuration", [None, [1, 2], "text", 7])
async def test_save_rejects_non_object_configuration(client, configuration):
    res = await _save(client, configuration=configuration)
    assert res.status_code == 400


async def test_save_rejects_blank_chart_type(client):
    res = await _save(client, chartType="   ")
    assert res.status_code == 400


async def test_save_rejects_reserved_chart_type(client):
    res = await _save(client, chartType="thumbnail:line")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── thumbnails ──────────────────────────────────────────────────

async def test_save_with_thumbnail_then_get_thumbnail(client):
    svg = '<svg xmlns="http://www.w3.org/2000/svg" width="120" height="80"><rect/></svg>'
    res = await _save(client, svgThumbnail=svg)
    assert res.json()["thumbnailSaved"] is True

    res = await client.get("/api/admin/get-thumbnail", params={"chartType": "line"})
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("image/svg+xml")
    assert res.headers["cache-control"] == "public, max-age=3600"
    assert res.text.startswith(
        '<svg viewBox="0 0 120 80" preserveAspectRatio="xMidYMid meet"',
    )
    assert res.text.endswith("<rect/></svg>")


async def test_thumbnail_without_dimensions_served_unchanged(client):
    svg = '<svg viewBox="0 0 10 10"><circle r="4"/></svg>'
    await _save(client, svgThumbnail=svg)
    res = await client.get("/api/admin/get-thumbnail", params={"chartType": "line"})
    assert res.text == svg


async def test_get_thumbnail_never_saved_is_404_value(client):
    await _save(client)
    res = await client.get("/api/admin/get-thumbnail", params={"chartType": "line"})
    assert res.status_code == 404
    assert res.json()["error"] == "No default thumbnail found for line"
    assert res.json()["success"] is False


async def test_whitespace_thumbnail_rejects_whole_save(client):
    res = await _save(client, configuration={"v": 1}, svgThumbnail="   ")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"

    res = await client.get("/api/admin/get-default", params={"chartType": "line"})
    assert res.status_code == 404


async def test_whitespace_thumbnail_keeps_previous_default(client):
    await _save(client, configuration={"v": 1})
    await _save(client, configuration={"v": 2}, svgThumbnail="\n")

    res = await client.get("/api/admin/get-default", params={"chartType": "line"})
    assert res.json()["configuration"] == {"v": 1}


async def test_empty_thumbnail_saves_configuration_only(client):
    res = await _save(client, svgThumbnail="")
    assert res.status_code == 200
    assert res.json()["thumbnailSaved"] is False


# ─── store failures ──────────────────────────────────────────────

@pytest.fixture
def failing_store(client):
    kv = InMemoryKeyValueStore()
    kv.fail = True
    app.dependency_overrides[get_default_store] = lambda: DefaultConfigStore(kv)
    return kv


async def test_save_with_store_down_is_503(client, failing_store):
    res = await _save(client)
    assert res.status_code == 503
    body = res.json()
    assert body["success"] is False
    assert body["error"]["code"] == "STORE_ERROR"
    assert body["error"]["category"] == "store"


async def test_get_default_with_store_down_is_503(client, failing_store):
    res = await client.get("/api/admin/get-default", params={"chartType": "line"})
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "STORE_ERROR"


async def test_get_thumbnail_with_store_down_is_503(client, failing_store):
    res = await client.get("/api/admin/get-thumbnail", params={"chartType": "line"})
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "STORE_ERROR"
