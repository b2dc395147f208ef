"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ChartType is an opaque non-empty string; the core never parses it
    - All valid states encoded as Enums — no raw string matching in rules

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ChartType = NewType("ChartType", str)
StoreKey = NewType("StoreKey", str)


# ─── Enums ───────────────────────────────────────────────────────

class AuthOutcome(str, Enum):
    """Result of the admin shared-secret gate."""
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    MISCONFIGURED = "misconfigured"


class LicenseStatus(str, Enum):
    """Provider license states that carry special meaning in verdict rules."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    DISABLED = "disabled"
    TRIALING = "trialing"


class WebhookEvent(str, Enum):
    """Provider webhook events with a dedicated log handler."""
    ORDER_CREATED = "order_created"
    SUBSCRIPTION_CREATED = "subscription_created"
    SUBSCRIPTION_UPDATED = "subscription_updated"
    SUBSCRIPTION_CANCELLED = "subscription_cancelled"
    SUBSCRIPTION_RESUMED = "subscription_resumed"
    SUBSCRIPTION_EXPIRED = "subscription_expired"
    SUBSCRIPTION_PAUSED = "subscription_paused"
    SUBSCRIPTION_UNPAUSED = "subscription_unpaused"
    LICENSE_KEY_CREATED = "license_key_created"
