"""Faker-based data generators for Locust load test scenarios.

Webhook bodies mirror the gateway's delivery format and are signed with the
webhook secret the target server is configured with (LOADTEST_WEBHOOK_SECRET).
Checkout signatures use the gateway key secret (LOADTEST_KEY_SECRET), which
must match the server's RAZORPAY_KEY_SECRET for verification to succeed.
"""

import json
import os
import random
import uuid

from faker import Faker
from payments.reconciliation.signature import compute_signature

fake = Faker()

WEBHOOK_SECRET = os.environ.get("LOADTEST_WEBHOOK_SECRET", "")
KEY_SECRET = os.environ.get("LOADTEST_KEY_SECRET", "")

FAILURE_REASONS = [
    "Insufficient funds",
    "Payment was cancelled by the customer",
    "Card expired",
    "Bank server is down",
]


# ---------- Checkout ----------


def order_id() -> int:
    """Internal order ids are positive integers."""
    return random.randint(1, 10_000_000)


def gateway_order_data() -> dict:
    """Generate a CreateGatewayOrderRequest payload."""
    return {
        "order_id": order_id(),
        "amount": f"{random.randint(100, 50_000)}.{random.randint(0, 99):02d}",
        "currency": "INR",
    }


def gateway_payment_id() -> str:
    return f"pay_{uuid.uuid4().hex[:14]}"


def verification_data(gateway_order_id: str, payment_id: str, forged: bool = False) -> dict:
    """Generate the fields checkout hands back after a payment."""
    signature = compute_signature(f"{gateway_order_id}|{payment_id}".encode("utf-8"), KEY_SECRET)
    if forged:
        signature = signature[::-1]
    return {
        "razorpay_order_id": gateway_order_id,
        "razorpay_payment_id": payment_id,
        "razorpay_signature": signature,
    }


# ---------- Webhooks ----------


def webhook_body(
    event: str,
    gateway_order_id: str,
    internal_order_id: int | None = None,
    amount: int = 0,
    failure_reason: str | None = None,
) -> bytes:
    """Build a webhook body for a payment event."""
    entity = {
        "id": gateway_payment_id(),
        "entity": "payment",
        "order_id": gateway_order_id,
        "status": event.split(".")[-1],
        "amount": amount,
        "currency": "INR",
        "email": fake.email(),
        "method": random.choice(["card", "upi", "netbanking"]),
        "notes": {"order_id": str(internal_order_id)} if internal_order_id else [],
    }
    if failure_reason:
        entity["error_code"] = "BAD_REQUEST_ERROR"
        entity["error_description"] = failure_reason
    return json.dumps(
        {
            "entity": "event",
            "event": event,
            "contains": ["payment"],
            "payload": {"payment": {"entity": entity}},
            "created_at": int(fake.unix_time()),
        }
    ).encode("utf-8")


def webhook_headers(body: bytes) -> dict:
    """Headers for a signed webhook delivery."""
    headers = {"Content-Type": "application/json"}
    if WEBHOOK_SECRET:
        headers["X-Razorpay-Signature"] = compute_signature(body, WEBHOOK_SECRET)
    return headers


def failure_reason() -> str:
    return random.choice(FAILURE_REASONS)
