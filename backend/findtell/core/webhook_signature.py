"""Webhook Signature — HMAC-SHA256 verification of provider webhook bodies.

Invariants:
    - Signature is the lowercase hex digest of HMAC-SHA256(secret, raw body)
    - Comparison is constant-time

Design Decisions:
    - Verified against the raw request bytes, not a re-serialized JSON body:
      re-serialization can change key order or whitespace and break the digest
"""

import hashlib
import hmac


def compute_signature(raw_body: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), raw_body, hashlib.sha256).hexdigest()


def verify_signature(raw_body: bytes, signature: str, secret: str) -> bool:
    """True when signature matches the body's HMAC under secret."""
    expected = compute_signature(raw_body, secret)
    return hmac.compare_digest(signature.encode(), expected.encode())
