"""Client-initiated checkout operations.

The storefront creates a gateway order before opening the gateway's checkout,
then sends back the payment id and signature the gateway handed the customer.
Invalid input raises ValidationError; gateway failures propagate as
GatewayError so the caller can react. A signature mismatch is a normal
FAILED outcome, not an error. Signatures are checked against the key secret
the service is built with; without one, nothing verifies.
"""

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, InvalidOperation

import structlog
from protean.exceptions import ValidationError

from payments.gateway.port import GatewayOrder, GatewayPayment, PaymentGateway
from payments.reconciliation.resolver import RECEIPT_PREFIX
from payments.reconciliation.signature import verify_payment_signature

logger = structlog.get_logger(__name__)

DEFAULT_CURRENCY = "INR"
ORDER_SOURCE = "ecommerce-platform"


@dataclass(frozen=True)
class PaymentVerification:
    """Outcome of verifying a checkout signature."""

    status: str  # SUCCESS, FAILED
    gateway_order_id: str
    gateway_payment_id: str
    message: str

    @property
    def verified(self) -> bool:
        return self.status == "SUCCESS"


def to_minor_units(amount) -> int:
    """Convert a major-unit amount (e.g. rupees) to minor units (paise), truncating."""
    try:
        value = Decimal(str(amount))
    except InvalidOperation as exc:
        raise ValidationError({"amount": [f"Invalid amount: {amount}"]}) from exc
    if not value.is_finite() or value <= 0:
        raise ValidationError({"amount": ["Order amount must be greater than zero"]})
    return int((value * 100).to_integral_value(rounding=ROUND_DOWN))


class CheckoutService:
    def __init__(self, gateway: PaymentGateway, key_secret: str = "") -> None:
        self.gateway = gateway
        self.key_secret = key_secret

    def create_gateway_order(
        self,
        order_id: int,
        amount,
        currency: str | None = None,
        receipt: str | None = None,
    ) -> GatewayOrder:
        if order_id is None or isinstance(order_id, bool) or order_id <= 0:
            raise ValidationError({"order_id": [f"Invalid order ID: {order_id}"]})
        amount_minor_units = to_minor_units(amount)
        if amount_minor_units <= 0:
            raise ValidationError({"amount": ["Order amount must be at least one minor unit"]})

        logger.debug("Creating gateway order", order_id=order_id, amount=str(amount))
        order = self.gateway.create_order(
            amount_minor_units=amount_minor_units,
            currency=currency or DEFAULT_CURRENCY,
            receipt=receipt or f"{RECEIPT_PREFIX}{order_id}",
            notes={"order_id": order_id, "source": ORDER_SOURCE},
        )
        logger.info("Gateway order created for order", order_id=order_id, gateway_order_id=order.id)
        return order

    def verify_payment(
        self,
        gateway_order_id: str,
        gateway_payment_id: str,
        signature: str,
    ) -> PaymentVerification:
        errors = {}
        if not gateway_order_id:
            errors["gateway_order_id"] = ["Gateway order ID cannot be empty"]
        if not gateway_payment_id:
            errors["gateway_payment_id"] = ["Gateway payment ID cannot be empty"]
        if not signature:
            errors["signature"] = ["Signature cannot be empty"]
        if errors:
            raise ValidationError(errors)

        if verify_payment_signature(gateway_order_id, gateway_payment_id, signature, self.key_secret):
            logger.info(
                "Payment verified",
                gateway_order_id=gateway_order_id,
                gateway_payment_id=gateway_payment_id,
            )
            return PaymentVerification(
                status="SUCCESS",
                gateway_order_id=gateway_order_id,
                gateway_payment_id=gateway_payment_id,
                message="Payment verified successfully",
            )

        logger.warning(
            "Payment verification failed, invalid signature",
            gateway_order_id=gateway_order_id,
            gateway_payment_id=gateway_payment_id,
        )
        return PaymentVerification(
            status="FAILED",
            gateway_order_id=gateway_order_id,
            gateway_payment_id=gateway_payment_id,
            message="Payment verification failed - Invalid signature",
        )

    def fetch_payment_status(self, gateway_payment_id: str) -> GatewayPayment | None:
        if not gateway_payment_id or not gateway_payment_id.strip():
            raise ValidationError({"gateway_payment_id": ["Gateway payment ID cannot be empty"]})
        return self.gateway.fetch_payment(gateway_payment_id)
