"""Razorpay payment gateway adapter.

Thin synchronous client over Razorpay's REST API using HTTP basic auth
(key id / key secret). Every call carries an explicit timeout so a slow
gateway cannot stall a webhook or checkout request indefinitely.
"""

import requests
import structlog

from payments.gateway.port import GatewayError, GatewayOrder, GatewayPayment, PaymentGateway
from payments.reconciliation.signature import verify_payment_signature

logger = structlog.get_logger(__name__)


def _notes(value) -> dict:
    # Razorpay serialises empty notes as []
    return value if isinstance(value, dict) else {}


def _order_from_json(data: dict) -> GatewayOrder:
    return GatewayOrder(
        id=data["id"],
        status=data.get("status"),
        amount=data.get("amount"),
        currency=data.get("currency"),
        receipt=data.get("receipt"),
        notes=_notes(data.get("notes")),
    )


def _payment_from_json(data: dict) -> GatewayPayment:
    return GatewayPayment(
        id=data["id"],
        order_id=data.get("order_id"),
        status=data.get("status"),
        amount=data.get("amount"),
        currency=data.get("currency"),
        email=data.get("email"),
        method=data.get("method"),
    )


class RazorpayGateway(PaymentGateway):
    """Production Razorpay gateway adapter."""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        api_url: str = "https://api.razorpay.com/v1",
        timeout: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = (key_id, key_secret)

    def create_order(
        self,
        amount_minor_units: int,
        currency: str,
        receipt: str,
        notes: dict,
    ) -> GatewayOrder:
        payload = {
            "amount": amount_minor_units,
            "currency": currency,
            "receipt": receipt,
            "notes": notes,
        }
        data = self._request("POST", "/orders", json=payload)
        order = _order_from_json(data)
        logger.info("Gateway order created", gateway_order_id=order.id, receipt=receipt)
        return order

    def fetch_order(self, gateway_order_id: str) -> GatewayOrder | None:
        data = self._request("GET", f"/orders/{gateway_order_id}", allow_missing=True)
        return _order_from_json(data) if data is not None else None

    def verify_payment_signature(
        self,
        gateway_order_id: str,
        gateway_payment_id: str,
        signature: str,
    ) -> bool:
        return verify_payment_signature(gateway_order_id, gateway_payment_id, signature, self.key_secret)

    def fetch_payment(self, gateway_payment_id: str) -> GatewayPayment | None:
        data = self._request("GET", f"/payments/{gateway_payment_id}", allow_missing=True)
        return _payment_from_json(data) if data is not None else None

    def _request(self, method: str, path: str, allow_missing: bool = False, **kwargs) -> dict | None:
        url = f"{self.api_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error("Gateway request failed", method=method, path=path, error=str(exc))
            raise GatewayError(f"Gateway request failed: {exc}") from exc

        if allow_missing and self._is_missing(response):
            return None

        if not response.ok:
            logger.error(
                "Gateway returned an error",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise GatewayError(
                f"Gateway returned {response.status_code} for {method} {path}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise GatewayError("Gateway returned a non-JSON body", status_code=response.status_code) from exc

        if not isinstance(data, dict) or "id" not in data:
            raise GatewayError("Gateway response has no id", status_code=response.status_code)
        return data

    @staticmethod
    def _is_missing(response: requests.Response) -> bool:
        if response.status_code == 404:
            return True
        # Razorpay answers lookups of unknown ids with 400 BAD_REQUEST_ERROR
        if response.status_code == 400:
            try:
                error = response.json().get("error") or {}
            except (ValueError, AttributeError):
                return False
            return "does not exist" in str(error.get("description", ""))
        return False
