"""In-memory Order Store for development and testing."""

from payments.order_store.port import (
    VALID_ORDER_STATUSES,
    OrderLookupResult,
    OrderStatus,
    OrderStore,
    StatusUpdateResult,
)


class FakeOrderStore(OrderStore):
    """Order Store that keeps order statuses in memory and records calls."""

    def __init__(self) -> None:
        self.statuses: dict[int, str] = {}
        self.external_references: dict[str, int] = {}
        self.calls: list[dict] = []
        self.should_succeed: bool = True
        self.failure_reason: str = "Order service unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Order service unavailable") -> None:
        """Configure the fake store behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def add_order(
        self,
        order_id: int,
        status: str = OrderStatus.PENDING.value,
        gateway_order_id: str | None = None,
    ) -> None:
        """Seed an order, optionally linked to a gateway order id."""
        self.statuses[order_id] = status
        if gateway_order_id:
            self.external_references[gateway_order_id] = order_id

    def update_status(self, order_id: int, status: str) -> StatusUpdateResult:
        self.calls.append({"method": "update_status", "order_id": order_id, "status": status})

        if not self.should_succeed:
            return StatusUpdateResult(success=False, error=self.failure_reason)
        if status not in VALID_ORDER_STATUSES:
            return StatusUpdateResult(success=False, error=f"Invalid order status: {status}")

        self.statuses[order_id] = status
        return StatusUpdateResult(success=True)

    def find_by_external_reference(self, gateway_order_id: str) -> OrderLookupResult:
        self.calls.append({"method": "find_by_external_reference", "gateway_order_id": gateway_order_id})

        if not self.should_succeed:
            return OrderLookupResult(success=False, error=self.failure_reason)

        order_id = self.external_references.get(gateway_order_id)
        if order_id is None:
            return OrderLookupResult(success=False, error="Order not found")
        return OrderLookupResult(success=True, order_id=order_id)

    def reset(self) -> None:
        """Clear state and recorded calls (useful between tests)."""
        self.statuses.clear()
        self.external_references.clear()
        self.calls.clear()
        self.should_succeed = True
        self.failure_reason = "Order service unavailable"
