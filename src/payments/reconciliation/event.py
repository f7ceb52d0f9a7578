"""PaymentEvent value object and the webhook body parser that builds it.

The gateway posts ``{"event": ..., "payload": {"payment": {"entity": {...}}}}``.
Everything the reconciliation flow needs from the entity is read once, here,
into an immutable PaymentEvent.
"""

import json

from protean.exceptions import ValidationError
from protean.fields import Dict, Integer, Text

from payments.domain import payments


class MalformedWebhookPayload(ValueError):
    """The webhook body is not a payment event we can read."""


@payments.value_object
class PaymentEvent:
    """A single payment lifecycle event as delivered by the gateway."""

    event_name: Text(required=True)
    gateway_payment_id: Text(required=True)
    gateway_order_id: Text(required=True)
    status: Text(required=True)
    amount_minor_units: Integer(min_value=0)
    currency: Text()
    email: Text()
    error_code: Text()
    error_description: Text()
    notes: Dict()


def _required_str(entity: dict, key: str) -> str:
    value = entity.get(key)
    if value is None or value == "":
        raise MalformedWebhookPayload(f"Payment entity is missing '{key}'")
    return str(value)


def _optional_str(entity: dict, key: str) -> str | None:
    value = entity.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _optional_int(entity: dict, key: str) -> int | None:
    value = entity.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if number >= 0 else None


def parse_webhook_body(raw_body: bytes) -> PaymentEvent:
    """Decode a webhook body into a PaymentEvent.

    Raises:
        MalformedWebhookPayload: the body is not JSON, lacks the payment
            entity, or the entity lacks a required field.
    """
    try:
        data = json.loads(raw_body)
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedWebhookPayload(f"Webhook body is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedWebhookPayload("Webhook body must be a JSON object")

    event_name = data.get("event")
    if not isinstance(event_name, str) or not event_name:
        raise MalformedWebhookPayload("Webhook body is missing 'event'")

    entity = data
    for key in ("payload", "payment", "entity"):
        entity = entity.get(key) if isinstance(entity, dict) else None
    if not isinstance(entity, dict):
        raise MalformedWebhookPayload("Webhook body is missing 'payload.payment.entity'")

    notes = entity.get("notes")
    # The gateway serialises an empty notes map as an empty JSON array
    if not isinstance(notes, dict):
        notes = {}

    try:
        return PaymentEvent(
            event_name=event_name,
            gateway_payment_id=_required_str(entity, "id"),
            gateway_order_id=_required_str(entity, "order_id"),
            status=_required_str(entity, "status"),
            amount_minor_units=_optional_int(entity, "amount"),
            currency=_optional_str(entity, "currency"),
            email=_optional_str(entity, "email"),
            error_code=_optional_str(entity, "error_code"),
            error_description=_optional_str(entity, "error_description"),
            notes=notes,
        )
    except ValidationError as exc:
        raise MalformedWebhookPayload(f"Invalid payment entity: {exc.messages}") from exc
