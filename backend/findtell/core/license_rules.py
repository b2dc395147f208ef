"""License Verdict Rules — maps a provider reply to an accept/reject verdict.

Invariants:
    - All functions are PURE: no IO, no async, no settings lookups
    - Each check returns a rejecting verdict on violation, None when it passes
    - evaluate_validation chains the checks in order — first rejection wins:
      provider rejection > product scope > provider valid flag > activation limit
    - Product scope and activation limit override a provider "valid": true
    - Verdicts are values, never exceptions

Design Decisions:
    - Pure functions over method dispatch: testable without a provider or mocks
    - Dataclasses with to_response(): routes emit the camelCase wire shape directly
"""

from dataclasses import dataclass
from typing import Any

from findtell.core.domain_types import LicenseStatus
from findtell.core.repository_protocols import ProviderReply

VALIDATION_FAILED = "License validation failed"
WRONG_PRODUCT = "Invalid license for this product"
EXPIRED = "License has expired"
DISABLED = "License has been disabled"
NOT_VALID = "License is not valid"
ACTIVATION_FAILED = "Activation failed"
ACTIVATION_UNPROCESSABLE = "Activation limit reached or invalid license"
ACTIVATED = "License activated successfully"


@dataclass
class LicenseInstance:
    """Activation instance as reported by the provider."""
    id: str | None
    name: str | None
    created_at: str | None = None

    def to_response(self) -> dict:
        data = {"id": self.id, "name": self.name}
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        return data


@dataclass
class LicenseDescriptor:
    """Normalized license details returned to clients on success."""
    key: str | None
    status: str | None
    product_id: Any
    activation_limit: int
    activation_usage: int
    expires_at: str | None
    is_trial: bool
    status_formatted: str | None = None
    instance: LicenseInstance | None = None

    def to_response(self) -> dict:
        return {
            "key": self.key,
            "status": self.status,
            "productId": self.product_id,
            "activationLimit": self.activation_limit,
            "activationUsage": self.activation_usage,
            "expiresAt": self.expires_at,
            "isTrial": self.is_trial,
            "statusFormatted": self.status_formatted,
            "instance": self.instance.to_response() if self.instance else None,
        }


@dataclass
class LicenseVerdict:
    """Outcome of validate — valid with a descriptor, or invalid with a message."""
    valid: bool
    error: str | None = None
    status: str | None = None
    license: LicenseDescriptor | None = None
    activation_limit: int | None = None
    activation_usage: int | None = None

    def to_response(self) -> dict:
        data: dict[str, Any] = {"valid": self.valid}
        if self.error is not None:
            data["error"] = self.error
        if self.status is not None:
            data["status"] = self.status
        if self.activation_limit is not None:
            data["activationLimit"] = self.activation_limit
            data["activationUsage"] = self.activation_usage
        if self.license is not None:
            data["license"] = self.license.to_response()
        return data


@dataclass
class ActivationResult:
    """Outcome of activate — mirrors LicenseVerdict with success/message wording."""
    success: bool
    error: str | None = None
    message: str | None = None
    license: LicenseDescriptor | None = None

    def to_response(self) -> dict:
        data: dict[str, Any] = {"success": self.success}
        if self.error is not None:
            data["error"] = self.error
        if self.message is not None:
            data["message"] = self.message
        if self.license is not None:
            data["license"] = self.license.to_response()
        return data


# ─── Payload helpers ─────────────────────────────────────────────

def extract_license_payload(body: dict) -> dict | None:
    """Return the provider's license_key object, or None if the body lacks one."""
    payload = body.get("license_key")
    return payload if isinstance(payload, dict) else None


def provider_error_message(body: dict, fallback: str) -> str:
    message = body.get("error")
    return message if isinstance(message, str) and message else fallback


def _activation_counts(payload: dict) -> tuple[int, int]:
    return payload.get("activation_limit") or 0, payload.get("activation_usage") or 0


def _product_mismatch(payload: dict, expected_product_id: str | None) -> bool:
    if not expected_product_id:
        return False
    return str(payload.get("product_id")) != str(expected_product_id)


def build_descriptor(
    payload: dict, instance: dict | None = None, with_created_at: bool = False,
) -> LicenseDescriptor:
    """Normalize the provider license object. isTrial derives from status."""
    limit, usage = _activation_counts(payload)
    status = payload.get("status")
    instance_data = instance if instance is not None else payload.get("instance")
    return LicenseDescriptor(
        key=payload.get("key"),
        status=status,
        product_id=payload.get("product_id"),
        activation_limit=limit,
        activation_usage=usage,
        expires_at=payload.get("expires_at"),
        is_trial=status == LicenseStatus.TRIALING.value,
        status_formatted=payload.get("status_formatted"),
        instance=LicenseInstance(
            id=instance_data.get("id"),
            name=instance_data.get("name"),
            created_at=instance_data.get("created_at") if with_created_at else None,
        ) if isinstance(instance_data, dict) else None,
    )


# ─── Validation checks ───────────────────────────────────────────

def check_provider_rejection(reply: ProviderReply) -> LicenseVerdict | None:
    """Rule 1: a non-success provider status is a normal invalid verdict."""
    if not reply.ok:
        return LicenseVerdict(
            valid=False,
            error=provider_error_message(reply.body, VALIDATION_FAILED),
        )
    return None


def check_product_scope(
    payload: dict, expected_product_id: str | None,
) -> LicenseVerdict | None:
    """Rule 2: a key issued for another product is rejected even if valid upstream."""
    if _product_mismatch(payload, expected_product_id):
        return LicenseVerdict(valid=False, error=WRONG_PRODUCT)
    return None


def check_provider_validity(payload: dict) -> LicenseVerdict | None:
    """Rule 3: provider valid=false maps its status to a message."""
    if payload.get("valid"):
        return None
    status = payload.get("status")
    if status == LicenseStatus.EXPIRED.value:
        message = EXPIRED
    elif status == LicenseStatus.DISABLED.value:
        message = DISABLED
    else:
        message = NOT_VALID
    return LicenseVerdict(valid=False, error=message, status=status)


def check_activation_limit(payload: dict) -> LicenseVerdict | None:
    """Rule 4: seat cap enforced here regardless of provider enforcement."""
    limit, usage = _activation_counts(payload)
    if limit > 0 and usage >= limit:
        return LicenseVerdict(
            valid=False,
            error=(
                f"Activation limit reached ({usage}/{limit}). "
                f"Please deactivate on another device."
            ),
            activation_limit=limit,
            activation_usage=usage,
        )
    return None


def evaluate_validation(
    reply: ProviderReply, expected_product_id: str | None,
) -> LicenseVerdict:
    """Chain all validation rules. Caller guarantees ok replies carry a license_key object."""
    rejection = check_provider_rejection(reply)
    if rejection:
        return rejection
    payload = extract_license_payload(reply.body) or {}
    return (
        check_product_scope(payload, expected_product_id)
        or check_provider_validity(payload)
        or check_activation_limit(payload)
        or LicenseVerdict(valid=True, license=build_descriptor(payload))
    )


# ─── Activation ──────────────────────────────────────────────────

def evaluate_activation(
    reply: ProviderReply, expected_product_id: str | None, license_key: str,
) -> ActivationResult:
    """Map an activate reply. Product scope only applies when a product id is reported."""
    if not reply.ok:
        fallback = (
            ACTIVATION_UNPROCESSABLE if reply.status_code == 422
            else ACTIVATION_FAILED
        )
        return ActivationResult(
            success=False, error=provider_error_message(reply.body, fallback),
        )

    payload = extract_license_payload(reply.body) or {}
    if payload.get("product_id") is not None and _product_mismatch(
        payload, expected_product_id,
    ):
        return ActivationResult(success=False, error=WRONG_PRODUCT)

    instance = payload.get("instance") or reply.body.get("instance")
    descriptor = build_descriptor(payload, instance=instance, with_created_at=True)
    descriptor.key = descriptor.key or license_key
    descriptor.status = descriptor.status or LicenseStatus.ACTIVE.value
    return ActivationResult(success=True, message=ACTIVATED, license=descriptor)
