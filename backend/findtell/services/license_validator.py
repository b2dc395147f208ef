"""License Validator — asks the provider about a key and returns a verdict.

Invariants:
    - Read-only against the provider; never touches the store
    - Provider rejections and ineligible licenses come back as values
    - Transport/parse failures propagate as ProviderTransportError (never as "invalid")
    - Expected product id is fixed at construction, never re-read per call

Design Decisions:
    - Impureim sandwich: provider IO here, verdict rules in core/license_rules.py
    - A 2xx reply without a license_key object is a parse failure, not a verdict
"""

import logging

from findtell.core.errors import InputError, ProviderTransportError
from findtell.core.license_rules import (
    ActivationResult,
    LicenseVerdict,
    evaluate_activation,
    evaluate_validation,
    extract_license_payload,
)
from findtell.core.repository_protocols import LicenseProvider, ProviderReply

logger = logging.getLogger(__name__)


class LicenseValidator:
    """Validates and activates license keys against the upstream provider."""

    def __init__(self, provider: LicenseProvider, expected_product_id: str | None):
        self.provider = provider
        self.expected_product_id = expected_product_id

    async def validate(
        self, license_key: str, instance_id: str | None = None,
    ) -> LicenseVerdict:
        if not isinstance(license_key, str) or not license_key:
            raise InputError("License key is required", "licenseKey")

        reply = await self.provider.validate(license_key, instance_id)
        self._require_license_payload(reply, "validation")
        verdict = evaluate_validation(reply, self.expected_product_id)
        if not verdict.valid:
            logger.warning(
                f"License rejected: {verdict.error}",
                extra={"provider_status": reply.status_code},
            )
        return verdict

    async def activate(self, license_key: str, instance_name: str) -> ActivationResult:
        if not isinstance(license_key, str) or not license_key:
            raise InputError("License key is required", "licenseKey")
        if not isinstance(instance_name, str) or not instance_name:
            raise InputError("Instance name is required", "instanceName")

        reply = await self.provider.activate(license_key, instance_name)
        self._require_license_payload(reply, "activation")
        result = evaluate_activation(reply, self.expected_product_id, license_key)
        if not result.success:
            logger.warning(
                f"License activation refused: {result.error}",
                extra={"provider_status": reply.status_code},
            )
        return result

    @staticmethod
    def _require_license_payload(reply: ProviderReply, operation: str) -> None:
        if reply.ok and extract_license_payload(reply.body) is None:
            logger.error(
                f"Provider {operation} reply has no license_key object",
                extra={"operation": operation, "provider_status": reply.status_code},
            )
            raise ProviderTransportError(operation, "missing license_key object")
