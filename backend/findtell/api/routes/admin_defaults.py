"""Admin Defaults — read and save per-chart-type default configurations and thumbnails.

Invariants:
    - Saves pass require_admin before the store is touched
    - A save rejected for any field writes nothing, not even the configuration
    - Reads are public; absent records return 404 {success: false, ...} as a value
    - Thumbnails are served as image/svg+xml, normalized to scale with their container,
      with a public cache directive

Design Decisions:
    - Thumbnail normalization on read, originals stored verbatim: the stored asset
      stays exactly what the admin uploaded
    - Thin routes delegate to DefaultConfigStore (ADR: ExMA impureim sandwich)
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from findtell.api.dependencies import (
    get_app_settings, get_default_store, require_admin,
)
from findtell.config import Settings
from findtell.core.domain_types import ChartType
from findtell.schemas.defaults import (
    DefaultConfigResponse, NotFoundResponse,
    SaveDefaultRequest, SaveDefaultResponse,
)
from findtell.services.default_config_store import DefaultConfigStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["admin"])

SVG_MEDIA_TYPE = "image/svg+xml"


def _not_found(message: str, chart_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=NotFoundResponse(
            error=message, chart_type=chart_type,
        ).model_dump(by_alias=True),
    )


@router.get("/get-default", response_model=DefaultConfigResponse)
async def get_default(
    chart_type: str = Query(..., alias="chartType", min_length=1),
    store: DefaultConfigStore = Depends(get_default_store),
):
    """Default configuration for a chart type."""
    record = await store.get_config(ChartType(chart_type))
    if record is None:
        return _not_found(
            f"No default configuration found for {chart_type}", chart_type,
        )
    return DefaultConfigResponse(
        chart_type=record.chart_type,
        configuration=record.configuration,
        updated_at=record.updated_at,
        updated_by=record.updated_by,
    )


@router.post("/save-default", response_model=SaveDefaultResponse)
async def save_default(
    body: SaveDefaultRequest,
    actor: str = Depends(require_admin),
    store: DefaultConfigStore = Depends(get_default_store),
):
    """Save a configuration (and optionally a thumbnail) as a chart type's default."""
    chart_type = ChartType(body.chart_type)
    _, thumbnail_saved = await store.save_default(
        chart_type, body.configuration, actor, svg=body.svg_thumbnail,
    )
    return SaveDefaultResponse(
        message=f"Default configuration saved for {chart_type}",
        chart_type=chart_type,
        thumbnail_saved=thumbnail_saved,
    )


@router.get("/get-thumbnail")
async def get_thumbnail(
    chart_type: str = Query(..., alias="chartType", min_length=1),
    store: DefaultConfigStore = Depends(get_default_store),
    settings: Settings = Depends(get_app_settings),
):
    """Responsive SVG thumbnail for a chart type."""
    svg = await store.get_responsive_thumbnail(ChartType(chart_type))
    if svg is None:
        return _not_found(f"No default thumbnail found for {chart_type}", chart_type)
    return Response(
        content=svg,
        media_type=SVG_MEDIA_TYPE,
        headers={
            "Cache-Control": f"public, max-age={settings.thumbnail_cache_seconds}",
        },
    )
