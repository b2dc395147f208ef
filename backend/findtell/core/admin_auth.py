"""Admin Gate — shared-secret bearer-token check for mutating store operations.

Invariants:
    - Pure function: secret is passed in, never read from the environment
    - Missing secret is MISCONFIGURED (operator fault), checked before the caller's header
    - Missing or non-"Bearer " header is UNAUTHORIZED; wrong token is FORBIDDEN

Design Decisions:
    - Exact string equality, no hashing or rate limiting: low-value internal endpoint
"""

from findtell.core.domain_types import AuthOutcome

BEARER_PREFIX = "Bearer "


def authorize(header_value: str | None, admin_secret: str | None) -> AuthOutcome:
    """Classify an Authorization header against the configured admin secret."""
    if not admin_secret:
        return AuthOutcome.MISCONFIGURED
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return AuthOutcome.UNAUTHORIZED
    token = header_value[len(BEARER_PREFIX):]
    if token != admin_secret:
        return AuthOutcome.FORBIDDEN
    return AuthOutcome.AUTHORIZED
