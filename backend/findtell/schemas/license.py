"""License Schemas — request models for license validation and activation.

Invariants:
    - licenseKey is a non-empty string; instanceId is optional
    - Activation requires a non-empty instanceName

Design Decisions:
    - Responses are produced by core/license_rules.py dataclasses (to_response),
      so only requests need Pydantic models here
"""

from pydantic import BaseModel, ConfigDict, Field


class ValidateLicenseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    license_key: str = Field(alias="licenseKey", min_length=1, max_length=255)
    instance_id: str | None = Field(None, alias="instanceId", max_length=255)


class ActivateLicenseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    license_key: str = Field(alias="licenseKey", min_length=1, max_length=255)
    instance_name: str = Field(alias="instanceName", min_length=1, max_length=255)
