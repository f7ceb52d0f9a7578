"""Order reference resolution: gateway order id to internal order id.

Three strategies are tried in order, and the first that yields a positive
integer wins:

1. ``notes.order_id`` carried on the payment event (no network call)
2. the receipt on the gateway order, ``order_<id>`` or a bare ``<id>``
3. the ordering service's lookup by gateway order id

Each strategy is total: a parse failure, a non-positive id, a missing record
or a remote error all fall through to the next one. ``resolve`` returns None
only when every strategy has been exhausted, and never raises.
"""

import re
from collections.abc import Callable, Mapping

import structlog

from payments.gateway.port import GatewayError, PaymentGateway
from payments.order_store.port import OrderStore

logger = structlog.get_logger(__name__)

RECEIPT_PREFIX = "order_"

_INTEGER = re.compile(r"[+-]?\d+")

# (gateway_order_id, notes) -> positive order id or None
ResolutionStep = Callable[[str, Mapping], int | None]


def parse_positive_int(value) -> int | None:
    """Parse ``value`` as a positive integer, or return None.

    Accepts ints, integral floats and strings of digits. Booleans and
    anything zero or negative are rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _INTEGER.fullmatch(text):
            return None
        number = int(text)
    else:
        return None
    return number if number > 0 else None


def order_id_from_receipt(receipt: str | None) -> int | None:
    """Extract the internal order id from a gateway receipt string.

    ``order_<id>`` is the format checkout writes. Receipts without that
    prefix are read as a bare id to accommodate older orders.
    """
    if not receipt:
        return None
    if receipt.startswith(RECEIPT_PREFIX):
        return parse_positive_int(receipt[len(RECEIPT_PREFIX) :])
    return parse_positive_int(receipt)


class OrderReferenceResolver:
    def __init__(self, gateway: PaymentGateway, order_store: OrderStore) -> None:
        self.gateway = gateway
        self.order_store = order_store
        self.steps: list[tuple[str, ResolutionStep]] = [
            ("notes", self.from_notes),
            ("receipt", self.from_receipt),
            ("order_store", self.from_order_store),
        ]

    def resolve(self, gateway_order_id: str, notes: Mapping | None = None) -> int | None:
        """Return the internal order id for ``gateway_order_id``, or None."""
        notes = notes or {}
        for name, step in self.steps:
            try:
                order_id = step(gateway_order_id, notes)
            except Exception as exc:
                logger.error(
                    "Order resolution step failed",
                    step=name,
                    gateway_order_id=gateway_order_id,
                    error=str(exc),
                )
                continue

            if order_id is not None and order_id > 0:
                logger.info(
                    "Resolved order reference",
                    step=name,
                    gateway_order_id=gateway_order_id,
                    order_id=order_id,
                )
                return order_id

        logger.warning("Could not resolve order reference", gateway_order_id=gateway_order_id)
        return None

    def from_notes(self, gateway_order_id: str, notes: Mapping) -> int | None:
        return parse_positive_int(notes.get("order_id"))

    def from_receipt(self, gateway_order_id: str, notes: Mapping) -> int | None:
        if not gateway_order_id:
            return None

        try:
            order = self.gateway.fetch_order(gateway_order_id)
        except GatewayError as exc:
            logger.warning("Gateway order fetch failed", gateway_order_id=gateway_order_id, error=str(exc))
            return None

        if order is None:
            logger.warning("Gateway order not found", gateway_order_id=gateway_order_id)
            return None

        order_id = order_id_from_receipt(order.receipt)
        if order_id is None:
            logger.warning(
                "Receipt does not carry an order id",
                gateway_order_id=gateway_order_id,
                receipt=order.receipt,
            )
        return order_id

    def from_order_store(self, gateway_order_id: str, notes: Mapping) -> int | None:
        if not gateway_order_id:
            return None

        result = self.order_store.find_by_external_reference(gateway_order_id)
        if not result.success:
            logger.warning(
                "Order service lookup found no order",
                gateway_order_id=gateway_order_id,
                error=result.error,
            )
            return None
        return parse_positive_int(result.order_id)
