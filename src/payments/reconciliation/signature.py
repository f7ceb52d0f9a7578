"""HMAC signature checks shared by the webhook and checkout paths.

Both checks use HMAC-SHA256 with a hex digest, compared in constant time.
Neither function raises: anything that goes wrong while computing the digest
counts as a mismatch.
"""

import hashlib
import hmac

import structlog

logger = structlog.get_logger(__name__)


def compute_signature(message: bytes, secret: str) -> str:
    """Return the hex HMAC-SHA256 of ``message`` keyed with ``secret``."""
    return hmac.new(secret.encode("utf-8"), msg=message, digestmod=hashlib.sha256).hexdigest()


def verify_webhook_signature(raw_body: bytes, signature_header: str, secret: str) -> bool:
    """Check that ``raw_body`` was signed by the gateway with ``secret``.

    An empty secret means verification is not configured and the body is
    accepted as-is. Callers are expected to log that case.
    """
    if not secret:
        return True

    try:
        expected = compute_signature(raw_body, secret)
        return hmac.compare_digest(expected.encode("utf-8"), (signature_header or "").encode("utf-8"))
    except Exception as exc:
        logger.error("Webhook signature computation failed", error=str(exc))
        return False


def verify_payment_signature(
    gateway_order_id: str,
    gateway_payment_id: str,
    signature: str,
    secret: str,
) -> bool:
    """Check the signature the gateway hands the client after checkout.

    The signed message is ``"<gateway_order_id>|<gateway_payment_id>"``.
    Unlike webhooks, an unconfigured secret never verifies.
    """
    if not secret:
        logger.warning("Gateway key secret not configured, payment signature rejected")
        return False

    try:
        message = f"{gateway_order_id}|{gateway_payment_id}".encode("utf-8")
        expected = compute_signature(message, secret)
        return hmac.compare_digest(expected.encode("utf-8"), (signature or "").encode("utf-8"))
    except Exception as exc:
        logger.error("Payment signature computation failed", error=str(exc))
        return False
