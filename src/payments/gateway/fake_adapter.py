"""Configurable fake payment gateway for development and testing.

This adapter simulates the payment gateway without any external calls.
It can be configured at runtime to succeed or fail, making it useful for:
- Manual API testing via /payments/gateway/configure
- Automated tests with predictable outcomes
- Development without real gateway credentials

Orders and payments are kept in memory; signatures are real HMACs over the
configured key secret, and an empty key secret verifies nothing.
"""

from uuid import uuid4

from payments.gateway.port import GatewayError, GatewayOrder, GatewayPayment, PaymentGateway
from payments.reconciliation.signature import verify_payment_signature

class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, key_secret: str = "") -> None:
        self.key_secret = key_secret
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.orders: dict[str, GatewayOrder] = {}
        self.payments: dict[str, GatewayPayment] = {}
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def add_order(self, order: GatewayOrder) -> None:
        """Seed a gateway order (e.g. one created before this process started)."""
        self.orders[order.id] = order

    def add_payment(self, payment: GatewayPayment) -> None:
        """Seed a gateway payment."""
        self.payments[payment.id] = payment

    def create_order(
        self,
        amount_minor_units: int,
        currency: str,
        receipt: str,
        notes: dict,
    ) -> GatewayOrder:
        self.calls.append(
            {
                "method": "create_order",
                "amount_minor_units": amount_minor_units,
                "currency": currency,
                "receipt": receipt,
                "notes": notes,
            }
        )
        self._raise_if_failing()

        order = GatewayOrder(
            id=f"order_fake{uuid4().hex[:10]}",
            status="created",
            amount=amount_minor_units,
            currency=currency,
            receipt=receipt,
            notes=dict(notes),
        )
        self.orders[order.id] = order
        return order

    def fetch_order(self, gateway_order_id: str) -> GatewayOrder | None:
        self.calls.append({"method": "fetch_order", "gateway_order_id": gateway_order_id})
        self._raise_if_failing()
        return self.orders.get(gateway_order_id)

    def verify_payment_signature(
        self,
        gateway_order_id: str,
        gateway_payment_id: str,
        signature: str,
    ) -> bool:
        self.calls.append(
            {
                "method": "verify_payment_signature",
                "gateway_order_id": gateway_order_id,
                "gateway_payment_id": gateway_payment_id,
            }
        )
        return verify_payment_signature(gateway_order_id, gateway_payment_id, signature, self.key_secret)

    def fetch_payment(self, gateway_payment_id: str) -> GatewayPayment | None:
        self.calls.append({"method": "fetch_payment", "gateway_payment_id": gateway_payment_id})
        self._raise_if_failing()
        return self.payments.get(gateway_payment_id)

    def _raise_if_failing(self) -> None:
        if not self.should_succeed:
            raise GatewayError(self.failure_reason, status_code=503)
