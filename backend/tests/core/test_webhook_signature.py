"""Webhook Signature — HMAC-SHA256 verification over raw bytes."""

import hashlib
import hmac

from findtell.core.webhook_signature import compute_signature, verify_signature

BODY = b'{"meta":{"event_name":"order_created"}}'


def test_compute_signature_is_hex_hmac_sha256():
    expected = hmac.new(b"secret", BODY, hashlib.sha256).hexdigest()
    assert compute_signature(BODY, "secret") == expected


def test_verify_accepts_matching_signature():
    assert verify_signature(BODY, compute_signature(BODY, "secret"), "secret")


def test_verify_rejects_wrong_secret():
    assert not verify_signature(BODY, compute_signature(BODY, "other"), "secret")


def test_verify_rejects_modified_body():
    signature = compute_signature(BODY, "secret")
    assert not verify_signature(BODY + b" ", signature, "secret")


def test_verify_rejects_non_ascii_signature_without_raising():
    assert not verify_signature(BODY, "é" * 64, "secret")
