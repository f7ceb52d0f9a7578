"""Payments bounded context — gateway webhook reconciliation and checkout.

Verifies inbound gateway webhooks, maps gateway-side payment events back to
internal orders, and drives order confirmation and customer notification.
Also exposes the client-initiated checkout flow (gateway order creation,
payment signature verification, payment status lookup).
"""

from protean.domain import Domain

from payments.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

payments = Domain(name="payments")
