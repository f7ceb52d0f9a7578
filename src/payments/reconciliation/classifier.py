"""Maps gateway webhook event names onto the payment actions we act on."""

from enum import Enum

import structlog

logger = structlog.get_logger(__name__)


class PaymentAction(Enum):
    AUTHORIZED = "Authorized"
    CAPTURED = "Captured"
    FAILED = "Failed"
    IGNORED = "Ignored"


_EVENT_ACTIONS = {
    "payment.authorized": PaymentAction.AUTHORIZED,
    "payment.captured": PaymentAction.CAPTURED,
    "payment.failed": PaymentAction.FAILED,
}


def classify(event_name: str | None) -> PaymentAction:
    """Return the action for ``event_name``; unknown names are ignored."""
    action = _EVENT_ACTIONS.get(event_name or "", PaymentAction.IGNORED)
    if action is PaymentAction.IGNORED:
        logger.info("Unhandled webhook event", event_name=event_name)
    return action
