"""HTTP adapter for the ordering service.

Talks to the ordering service's REST API, whose responses are wrapped in a
``{"success": bool, "message": str, "data": {...}}`` envelope.
"""

import requests
import structlog

from payments.order_store.port import (
    VALID_ORDER_STATUSES,
    OrderLookupResult,
    OrderStore,
    StatusUpdateResult,
)

logger = structlog.get_logger(__name__)


def _positive_int(value) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


class HttpOrderStore(OrderStore):
    """Order Store backed by the ordering service's HTTP API."""

    def __init__(self, base_url: str, timeout: float, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def update_status(self, order_id: int, status: str) -> StatusUpdateResult:
        if status not in VALID_ORDER_STATUSES:
            return StatusUpdateResult(success=False, error=f"Invalid order status: {status}")

        url = f"{self.base_url}/api/orders/{order_id}/status"
        try:
            response = self.session.put(url, json={"status": status}, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Order status update request failed", order_id=order_id, error=str(exc))
            return StatusUpdateResult(success=False, error=str(exc))

        if not response.ok:
            logger.warning(
                "Order service rejected status update",
                order_id=order_id,
                status_code=response.status_code,
            )
            return StatusUpdateResult(success=False, error=f"Order service returned {response.status_code}")

        logger.info("Order status updated", order_id=order_id, status=status)
        return StatusUpdateResult(success=True)

    def find_by_external_reference(self, gateway_order_id: str) -> OrderLookupResult:
        url = f"{self.base_url}/api/orders/by-razorpay-order/{gateway_order_id}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Order lookup request failed", gateway_order_id=gateway_order_id, error=str(exc))
            return OrderLookupResult(success=False, error=str(exc))

        if not response.ok:
            return OrderLookupResult(success=False, error=f"Order service returned {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            return OrderLookupResult(success=False, error="Order service returned a non-JSON body")

        if not isinstance(body, dict) or not body.get("success"):
            return OrderLookupResult(success=False, error="Order service reported failure")

        data = body.get("data")
        order_id = _positive_int(data.get("id")) if isinstance(data, dict) else None
        if order_id is None:
            return OrderLookupResult(success=False, error="Order service returned no valid order id")

        return OrderLookupResult(success=True, order_id=order_id)
