"""Tests for webhook signature verification."""

import base64
import hashlib
import hmac

import pytest

from cashier_fastspring.errors.exceptions import IntegrityViolation
from cashier_fastspring.webhooks.signature import compute_signature, verify_signature

BODY = b'{"events":[{"id":"evt_1","type":"order.completed"}]}'
SECRET = "my-secret"


def test_compute_signature():
    """Signature is the base64 HMAC-SHA256 digest of the raw body."""
    expected = base64.b64encode(
        hmac.new(SECRET.encode("utf-8"), BODY, hashlib.sha256).digest()
    ).decode("ascii")
    assert compute_signature(BODY, SECRET) == expected


def test_valid_signature_passes():
    verify_signature(BODY, compute_signature(BODY, SECRET), SECRET)


@pytest.mark.parametrize("secret", ["", None])
def test_no_secret_skips_verification(secret):
    """Without a secret anything passes, including a missing header."""
    verify_signature(BODY, None, secret)
    verify_signature(BODY, "not-a-signature", secret)


def test_missing_signature_rejected():
    with pytest.raises(IntegrityViolation):
        verify_signature(BODY, None, SECRET)


def test_wrong_secret_rejected():
    with pytest.raises(IntegrityViolation):
        verify_signature(BODY, compute_signature(BODY, "other-secret"), SECRET)


def test_every_single_byte_body_mutation_rejected():
    signature = compute_signature(BODY, SECRET)
    for index in range(len(BODY)):
        mutated = bytearray(BODY)
        mutated[index] ^= 0x01
        with pytest.raises(IntegrityViolation):
            verify_signature(bytes(mutated), signature, SECRET)


def test_signature_mutation_rejected():
    signature = compute_signature(BODY, SECRET)
    tampered = ("A" if signature[0] != "A" else "B") + signature[1:]
    with pytest.raises(IntegrityViolation):
        verify_signature(BODY, tampered, SECRET)


def test_reserialized_body_does_not_verify():
    """The digest covers the bytes as sent; pretty-printing the same JSON breaks it."""
    signature = compute_signature(BODY, SECRET)
    reformatted = b'{"events": [{"id": "evt_1", "type": "order.completed"}]}'
    with pytest.raises(IntegrityViolation):
        verify_signature(reformatted, signature, SECRET)


def test_violation_maps_to_forbidden():
    with pytest.raises(IntegrityViolation) as exc_info:
        verify_signature(BODY, "bad", SECRET)
    assert exc_info.value.status_code == 403
    assert exc_info.value.code == "INTEGRITY_VIOLATION"
