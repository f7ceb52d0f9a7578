"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
This enables swapping between FakeGateway (dev/test) and RazorpayGateway
(production) without changing the reconciliation or checkout code.

Lookups return None when the gateway reports the record does not exist;
transport failures and other non-2xx responses raise GatewayError.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class GatewayError(Exception):
    """The payment gateway could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class GatewayOrder:
    """A gateway-side order created for an internal order."""

    id: str
    status: str | None = None
    amount: int | None = None
    currency: str | None = None
    receipt: str | None = None
    notes: dict = field(default_factory=dict)


@dataclass(frozen=True)
class GatewayPayment:
    """A payment attempt recorded by the gateway."""

    id: str
    order_id: str | None = None
    status: str | None = None
    amount: int | None = None
    currency: str | None = None
    email: str | None = None
    method: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_order(
        self,
        amount_minor_units: int,
        currency: str,
        receipt: str,
        notes: dict,
    ) -> GatewayOrder:
        """Create an order on the gateway that the customer will pay against."""
        ...

    @abstractmethod
    def fetch_order(self, gateway_order_id: str) -> GatewayOrder | None:
        """Fetch a gateway order, or None if the gateway does not know it."""
        ...

    @abstractmethod
    def verify_payment_signature(
        self,
        gateway_order_id: str,
        gateway_payment_id: str,
        signature: str,
    ) -> bool:
        """Verify the checkout signature returned to the client after payment."""
        ...

    @abstractmethod
    def fetch_payment(self, gateway_payment_id: str) -> GatewayPayment | None:
        """Fetch a payment, or None if the gateway does not know it."""
        ...
