"""Webhook signature verification for FastSpring deliveries.

FastSpring signs each webhook with the ``X-FS-Signature`` header: the base64
encoded HMAC-SHA256 of the raw request body keyed by the shared secret.
"""

import base64
import hashlib
import hmac
import logging

from cashier_fastspring.errors.exceptions import IntegrityViolation

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-FS-Signature"


def compute_signature(body: bytes, secret: str) -> str:
    """Compute the base64 HMAC-SHA256 signature over the raw body."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(body: bytes, signature: str | None, secret: str | None) -> None:
    """Verify a webhook body against its signature header.

    Verification is skipped when no secret is configured.

    Raises:
        IntegrityViolation: The secret is set and the signature is missing or wrong.
    """
    if not secret:
        logger.debug("FastSpring HMAC secret not configured, skipping verification")
        return

    if not signature:
        raise IntegrityViolation(f"Missing {SIGNATURE_HEADER} header")

    expected = compute_signature(body, secret)
    if not hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8")):
        raise IntegrityViolation()
