"""Default Config Store — per-chart-type default configurations and thumbnails.

Invariants:
    - Configurations live under "default:<type>", thumbnails under "default:thumbnail:<type>";
      the two record kinds never share a key and exist independently
    - Chart types starting with "thumbnail:" are rejected so the namespaces stay disjoint
    - set_config fully replaces the prior record (no merge, no history)
    - configuration is always a JSON object; its shape is never interpreted here
    - No delete: a missing key is reported as None (not found), never as a tombstone
    - A stored record whose configuration is not an object is reported as StoreError,
      never read back as an empty configuration
    - save_default checks every input before its first write
    - Thumbnails are stored verbatim; normalization happens on the read path only

Design Decisions:
    - Clock injected: updatedAt is testable without freezing time globally
    - KeyValueStore protocol injected: SQL in production, a dict fake in unit tests
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from findtell.core.domain_types import ChartType, StoreKey
from findtell.core.errors import InputError, StoreError
from findtell.core.repository_protocols import KeyValueStore
from findtell.core.svg_normalizer import normalize_svg

logger = logging.getLogger(__name__)

CONFIG_PREFIX = "default:"
THUMBNAIL_PREFIX = "default:thumbnail:"
RESERVED_CHART_PREFIX = THUMBNAIL_PREFIX[len(CONFIG_PREFIX):]


def config_key(chart_type: ChartType) -> StoreKey:
    return StoreKey(f"{CONFIG_PREFIX}{chart_type}")


def thumbnail_key(chart_type: ChartType) -> StoreKey:
    return StoreKey(f"{THUMBNAIL_PREFIX}{chart_type}")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DefaultConfiguration:
    """Stored default for one chart type."""
    chart_type: ChartType
    configuration: dict[str, Any]
    updated_at: str
    updated_by: str

    def to_document(self) -> dict:
        return {
            "chartType": self.chart_type,
            "configuration": self.configuration,
            "updatedAt": self.updated_at,
            "updatedBy": self.updated_by,
        }

    @classmethod
    def from_document(cls, chart_type: ChartType, doc: dict) -> "DefaultConfiguration":
        return cls(
            chart_type=chart_type,
            configuration=doc["configuration"],
            updated_at=doc.get("updatedAt", ""),
            updated_by=doc.get("updatedBy", ""),
        )


class DefaultConfigStore:
    """Read/write access to chart defaults over a key-value store."""

    def __init__(
        self, kv: KeyValueStore, clock: Callable[[], datetime] = _utcnow,
    ):
        self.kv = kv
        self.clock = clock

    async def get_config(self, chart_type: ChartType) -> DefaultConfiguration | None:
        _require_chart_type(chart_type)
        key = config_key(chart_type)
        doc = await self.kv.get(key)
        if doc is None:
            return None
        if not isinstance(doc, dict) or not isinstance(doc.get("configuration"), dict):
            logger.error(
                f"Corrupt default record at {key}",
                extra={"chart_type": chart_type, "operation": "get"},
            )
            raise StoreError(f"Corrupt default record at {key}", "get")
        return DefaultConfiguration.from_document(chart_type, doc)

    async def save_default(
        self,
        chart_type: ChartType,
        configuration: dict[str, Any],
        actor: str,
        svg: str | None = None,
    ) -> tuple[DefaultConfiguration, bool]:
        """Save a configuration and, when given, its thumbnail.

        Every input is checked before the first write, so a rejected save
        leaves the previous default in place. Returns the record and whether
        a thumbnail was written.
        """
        _require_chart_type(chart_type)
        _require_configuration(configuration)
        if svg is not None:
            _require_svg(svg)
        record = await self.set_config(chart_type, configuration, actor)
        if svg is None:
            return record, False
        await self.set_thumbnail(chart_type, svg)
        return record, True

    async def set_config(
        self, chart_type: ChartType, configuration: dict[str, Any], actor: str,
    ) -> DefaultConfiguration:
        """Save configuration as the default for chart_type, replacing any prior one."""
        _require_chart_type(chart_type)
        _require_configuration(configuration)
        record = DefaultConfiguration(
            chart_type=chart_type,
            configuration=configuration,
            updated_at=self.clock().isoformat(),
            updated_by=actor,
        )
        await self.kv.set(config_key(chart_type), record.to_document())
        logger.info(
            f"Default configuration saved for {chart_type} by {actor}",
            extra={"chart_type": chart_type},
        )
        return record

    async def get_thumbnail(self, chart_type: ChartType) -> str | None:
        """Raw SVG exactly as saved."""
        _require_chart_type(chart_type)
        svg = await self.kv.get(thumbnail_key(chart_type))
        return svg if isinstance(svg, str) and svg else None

    async def get_responsive_thumbnail(self, chart_type: ChartType) -> str | None:
        svg = await self.get_thumbnail(chart_type)
        return normalize_svg(svg) if svg is not None else None

    async def set_thumbnail(self, chart_type: ChartType, svg: str) -> None:
        _require_chart_type(chart_type)
        _require_svg(svg)
        await self.kv.set(thumbnail_key(chart_type), svg)
        logger.info(
            f"Default thumbnail saved for {chart_type}",
            extra={"chart_type": chart_type},
        )


def _require_chart_type(chart_type: ChartType) -> None:
    if not isinstance(chart_type, str) or not chart_type:
        raise InputError("Chart type is required", "chartType")
    # "default:" + "thumbnail:x" would land on x's thumbnail key
    if chart_type.startswith(RESERVED_CHART_PREFIX):
        raise InputError(
            f"Chart type may not start with '{RESERVED_CHART_PREFIX}'", "chartType",
        )


def _require_configuration(configuration: Any) -> None:
    if not isinstance(configuration, dict):
        raise InputError("Configuration object is required", "configuration")


def _require_svg(svg: Any) -> None:
    if not isinstance(svg, str) or not svg.strip():
        raise InputError("SVG thumbnail must be a non-empty string", "svgThumbnail")
