"""Webhook reconciliation, from a signed gateway delivery to order side effects.

A delivery moves through a fixed sequence of stages:

    VERIFY → PARSE → CLASSIFY → RESOLVE → APPLY → DONE

Only a failed signature check is surfaced to the caller (as
InvalidWebhookSignature). Every other problem, from an unreadable body to an
unreachable ordering service, is logged and recorded on the returned
ReconciliationOutcome, and the delivery is acknowledged. Gateway deliveries
are at-least-once, so redelivering the same event would not change the
result.

Duplicate deliveries re-apply CONFIRMED, which leaves the order unchanged.
Notifications are not deduplicated: a redelivered captured or failed event
sends its email again.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog
from structlog.contextvars import bound_contextvars

from payments.gateway.port import PaymentGateway
from payments.notifier.port import DeliveryResult, NotificationSender
from payments.notifier.templates import PAYMENT_CONFIRMED_DETAILS, PaymentFailedTemplate
from payments.order_store.port import OrderStatus, OrderStore, StatusUpdateResult
from payments.reconciliation.classifier import PaymentAction, classify
from payments.reconciliation.event import MalformedWebhookPayload, PaymentEvent, parse_webhook_body
from payments.reconciliation.resolver import OrderReferenceResolver
from payments.reconciliation.signature import verify_webhook_signature

logger = structlog.get_logger(__name__)


class FailureStage(Enum):
    NONE = "none"
    SIGNATURE = "signature"
    PARSE = "parse"
    RESOLUTION = "resolution"
    STATUS_UPDATE = "status-update"
    NOTIFICATION = "notification"


class InvalidWebhookSignature(Exception):
    """The webhook body was not signed with the configured webhook secret."""

    failure_stage = FailureStage.SIGNATURE


@dataclass(frozen=True)
class ReconciliationOutcome:
    """What happened to one webhook delivery."""

    action: PaymentAction | None = None
    order_id: int | None = None
    transition_applied: bool = False
    notification_sent: bool = False
    failure_stage: FailureStage = FailureStage.NONE


class ReconciliationOrchestrator:
    def __init__(
        self,
        gateway: PaymentGateway,
        order_store: OrderStore,
        notifier: NotificationSender,
        webhook_secret: str = "",
        resolver: OrderReferenceResolver | None = None,
    ) -> None:
        self.gateway = gateway
        self.order_store = order_store
        self.notifier = notifier
        self.webhook_secret = webhook_secret
        self.resolver = resolver or OrderReferenceResolver(gateway, order_store)

    def handle_webhook(self, signature_header: str, raw_body: bytes) -> ReconciliationOutcome:
        """Process one webhook delivery.

        Raises:
            InvalidWebhookSignature: the signature does not match the body.
        """
        if not self.webhook_secret:
            logger.warning("Webhook secret not configured, skipping signature verification")
        if not verify_webhook_signature(raw_body, signature_header, self.webhook_secret):
            logger.error("Invalid webhook signature received")
            raise InvalidWebhookSignature("Invalid webhook signature")

        try:
            event = parse_webhook_body(raw_body)
        except MalformedWebhookPayload as exc:
            logger.error("Malformed webhook payload", error=str(exc))
            return ReconciliationOutcome(failure_stage=FailureStage.PARSE)

        with bound_contextvars(gateway_payment_id=event.gateway_payment_id, gateway_order_id=event.gateway_order_id):
            return self._reconcile(event)

    def _reconcile(self, event: PaymentEvent) -> ReconciliationOutcome:
        logger.info("Webhook received", event_name=event.event_name, status=event.status)

        action = classify(event.event_name)
        if action is PaymentAction.IGNORED:
            return ReconciliationOutcome(action=action)

        order_id = self.resolver.resolve(event.gateway_order_id, event.notes)
        if order_id is None:
            logger.error("Webhook order reference unresolved, event dropped", event_name=event.event_name)
            return ReconciliationOutcome(action=action, failure_stage=FailureStage.RESOLUTION)

        if action is PaymentAction.AUTHORIZED:
            return self._on_authorized(event, order_id)
        if action is PaymentAction.CAPTURED:
            return self._on_captured(event, order_id)
        return self._on_failed(event, order_id)

    def _on_authorized(self, event: PaymentEvent, order_id: int) -> ReconciliationOutcome:
        logger.info("Payment authorized", order_id=order_id)
        confirmed = self._confirm_order(order_id)
        return ReconciliationOutcome(
            action=PaymentAction.AUTHORIZED,
            order_id=order_id,
            transition_applied=confirmed,
            failure_stage=FailureStage.NONE if confirmed else FailureStage.STATUS_UPDATE,
        )

    def _on_captured(self, event: PaymentEvent, order_id: int) -> ReconciliationOutcome:
        logger.info("Payment captured", order_id=order_id, amount=event.amount_minor_units)
        confirmed = self._confirm_order(order_id)

        notified = False
        if event.email:
            notified = self._notify(
                "order_confirmation",
                order_id,
                lambda: self.notifier.send_order_confirmation(event.email, order_id, PAYMENT_CONFIRMED_DETAILS),
            )

        return ReconciliationOutcome(
            action=PaymentAction.CAPTURED,
            order_id=order_id,
            transition_applied=confirmed,
            notification_sent=notified,
            failure_stage=self._failure_stage(confirmed, notified if event.email else True),
        )

    def _on_failed(self, event: PaymentEvent, order_id: int) -> ReconciliationOutcome:
        logger.warning(
            "Payment failed",
            order_id=order_id,
            error_code=event.error_code or "UNKNOWN",
            error_description=event.error_description or "Payment failed",
        )

        notified = False
        if event.email:
            message = PaymentFailedTemplate.render({"order_id": order_id, "reason": event.error_description})
            notified = self._notify(
                "payment_failure",
                order_id,
                lambda: self.notifier.send_email(event.email, message["subject"], message["body"]),
            )

        return ReconciliationOutcome(
            action=PaymentAction.FAILED,
            order_id=order_id,
            notification_sent=notified,
            failure_stage=self._failure_stage(True, notified if event.email else True),
        )

    def _confirm_order(self, order_id: int) -> bool:
        status = OrderStatus.CONFIRMED.value
        try:
            result: StatusUpdateResult = self.order_store.update_status(order_id, status)
        except Exception as exc:
            logger.error("Order status update raised", order_id=order_id, status=status, error=str(exc))
            return False

        if not result.success:
            logger.error("Order status update failed", order_id=order_id, status=status, error=result.error)
            return False
        logger.info("Order confirmed", order_id=order_id)
        return True

    def _notify(self, kind: str, order_id: int, send: Callable[[], DeliveryResult]) -> bool:
        try:
            result = send()
        except Exception as exc:
            logger.error("Notification raised", kind=kind, order_id=order_id, error=str(exc))
            return False

        if not result.success:
            logger.error("Notification failed", kind=kind, order_id=order_id, error=result.error)
            return False
        logger.info("Notification sent", kind=kind, order_id=order_id)
        return True

    @staticmethod
    def _failure_stage(status_ok: bool, notification_ok: bool) -> FailureStage:
        if not status_ok:
            return FailureStage.STATUS_UPDATE
        if not notification_ok:
            return FailureStage.NOTIFICATION
        return FailureStage.NONE
