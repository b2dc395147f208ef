"""License Routes — validate and activate license keys.

Invariants:
    - Every provider verdict (valid or not) is HTTP 200 with the verdict body
    - Provider transport failures surface through the global handler as a generic 500
    - Missing/empty licenseKey is a 400 before the provider is called
"""

from fastapi import APIRouter, Depends

from findtell.api.dependencies import get_license_validator
from findtell.schemas.license import ActivateLicenseRequest, ValidateLicenseRequest
from findtell.services.license_validator import LicenseValidator

router = APIRouter(prefix="/api", tags=["license"])


@router.post("/validate-license")
async def validate_license(
    body: ValidateLicenseRequest,
    validator: LicenseValidator = Depends(get_license_validator),
):
    verdict = await validator.validate(body.license_key, body.instance_id)
    return verdict.to_response()


@router.post("/activate-license")
async def activate_license(
    body: ActivateLicenseRequest,
    validator: LicenseValidator = Depends(get_license_validator),
):
    result = await validator.activate(body.license_key, body.instance_name)
    return result.to_response()
