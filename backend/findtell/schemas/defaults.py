"""Default Config Schemas — request/response models for the admin defaults endpoints.

Invariants:
    - chartType is a non-empty string; its format is otherwise unconstrained
    - configuration must be a JSON object (null, arrays, and primitives rejected)
    - configuration contents are never validated beyond being an object
    - svgThumbnail "" means no thumbnail; whitespace-only is rejected

Design Decisions:
    - camelCase aliases: the wire contract used by the chart editor and the design-tool plugin
    - populate_by_name: Python callers and tests may use snake_case field names
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SaveDefaultRequest(BaseModel):
    """Admin save — configuration plus optional SVG thumbnail."""
    model_config = ConfigDict(populate_by_name=True)

    chart_type: str = Field(alias="chartType", min_length=1, max_length=200)
    configuration: dict[str, Any]
    svg_thumbnail: str | None = Field(None, alias="svgThumbnail")

    @field_validator("chart_type")
    @classmethod
    def strip_chart_type(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("chartType cannot be empty or whitespace")
        return v

    @field_validator("svg_thumbnail")
    @classmethod
    def blank_thumbnail_rejected(cls, v: str | None) -> str | None:
        if v == "":
            return None
        if v is not None and not v.strip():
            raise ValueError("svgThumbnail cannot be whitespace")
        return v


class SaveDefaultResponse(BaseModel):
    """Acknowledgement of a saved default."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    chart_type: str = Field(alias="chartType")
    thumbnail_saved: bool = Field(False, alias="thumbnailSaved")


class DefaultConfigResponse(BaseModel):
    """A stored default configuration, as returned to readers."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    chart_type: str = Field(alias="chartType")
    configuration: dict[str, Any]
    updated_at: str = Field(alias="updatedAt")
    updated_by: str = Field(alias="updatedBy")


class NotFoundResponse(BaseModel):
    """Absent record — a normal outcome, not an error envelope."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    error: str
    chart_type: str = Field(alias="chartType")
