"""Order Store port — the ordering service as seen from Payments.

Payments never owns order state. It only asks the ordering service to move
an order to a new status and to look an order up by its gateway reference.
Adapters report failures as result values rather than raising, so the
reconciliation flow can record them and carry on.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


VALID_ORDER_STATUSES = frozenset(s.value for s in OrderStatus)


@dataclass(frozen=True)
class StatusUpdateResult:
    """Result of an order status update."""

    success: bool
    error: str | None = None


@dataclass(frozen=True)
class OrderLookupResult:
    """Result of looking an order up by its gateway order id."""

    success: bool
    order_id: int | None = None
    error: str | None = None


class OrderStore(ABC):
    """Abstract interface to the ordering service."""

    @abstractmethod
    def update_status(self, order_id: int, status: str) -> StatusUpdateResult:
        """Move an order to ``status`` (one of OrderStatus values)."""
        ...

    @abstractmethod
    def find_by_external_reference(self, gateway_order_id: str) -> OrderLookupResult:
        """Find the internal order that was linked to ``gateway_order_id``."""
        ...
