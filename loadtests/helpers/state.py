"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks the gateway order created at the start of a journey so the
webhook and verification steps can reference it.
"""

from dataclasses import dataclass


@dataclass
class CheckoutState:
    """Tracks state for a single checkout journey."""

    order_id: int | None = None
    gateway_order_id: str | None = None
    amount_minor_units: int = 0
    payment_id: str | None = None
