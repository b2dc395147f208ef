"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - ProviderReply is a plain value: the HTTP client hands the verdict rules
      status + parsed body and nothing transport-specific
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

from findtell.core.domain_types import StoreKey


@dataclass(frozen=True)
class ProviderReply:
    """A completed provider round trip: HTTP status and parsed JSON object."""
    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class KeyValueStore(Protocol):
    """Contract for the durable, single-key-atomic key-value service."""
    async def get(self, key: StoreKey) -> Any | None: ...
    async def set(self, key: StoreKey, value: Any) -> None: ...


class LicenseProvider(Protocol):
    """Contract for the upstream licensing provider — implemented by infrastructure."""
    async def validate(
        self, license_key: str, instance_id: str | None = None,
    ) -> ProviderReply: ...
    async def activate(
        self, license_key: str, instance_name: str,
    ) -> ProviderReply: ...
