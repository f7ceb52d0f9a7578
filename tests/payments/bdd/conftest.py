"""Shared BDD fixtures and step definitions for webhook reconciliation."""

import pytest
from payments.gateway.port import GatewayOrder
from payments.reconciliation.orchestrator import (
    FailureStage,
    InvalidWebhookSignature,
    ReconciliationOrchestrator,
)
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for a rejected delivery."""
    return {"exc": None}


@pytest.fixture()
def delivery():
    """Event fields the scenario builds up before delivering."""
    return {"event": "payment.captured", "status": "captured", "notes": None, "email": None}


@pytest.fixture()
def orchestrator(gateway, order_store, notifier, webhook_secret):
    return ReconciliationOrchestrator(gateway, order_store, notifier, webhook_secret=webhook_secret)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("order {order_id:d} is pending"))
def _pending_order(order_store, order_id):
    order_store.add_order(order_id)


@given(parsers.cfparse('the gateway order "{gateway_order_id}" has receipt "{receipt}"'))
def _gateway_order_receipt(gateway, gateway_order_id, receipt):
    gateway.add_order(
        GatewayOrder(id=gateway_order_id, status="paid", amount=50000, currency="INR", receipt=receipt)
    )


@given(parsers.cfparse('the payment notes carry order id "{order_id}"'))
def _notes_order_id(delivery, order_id):
    delivery["notes"] = {"order_id": order_id}


@given(parsers.cfparse('the customer email is "{email}"'))
def _customer_email(delivery, email):
    delivery["email"] = email


@given("the ordering service is unavailable")
def _ordering_down(order_store):
    order_store.configure(should_succeed=False)


@given("the notification service is unavailable")
def _notifications_down(notifier):
    notifier.configure(should_succeed=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('order {order_id:d} is "{status}"'))
def _order_status(order_store, order_id, status):
    assert order_store.statuses[order_id] == status


@then(parsers.cfparse('the delivery is acknowledged with failure stage "{stage}"'))
def _acknowledged(outcome, stage):
    assert outcome.failure_stage is FailureStage(stage)


@then("the delivery is rejected")
def _rejected(error):
    assert isinstance(error["exc"], InvalidWebhookSignature)


@then(parsers.cfparse('an order confirmation is sent to "{email}"'))
def _confirmation_sent(notifier, email):
    assert [c["email"] for c in notifier.sent_confirmations] == [email]


@then(parsers.cfparse('a payment failure email mentioning "{reason}" is sent to "{email}"'))
def _failure_email_sent(notifier, reason, email):
    assert len(notifier.sent_emails) == 1
    assert notifier.sent_emails[0]["to"] == email
    assert reason in notifier.sent_emails[0]["body"]


@then("no notification is sent")
def _no_notification(notifier):
    assert notifier.sent_confirmations == []
    assert notifier.sent_emails == []


@then("the order status is not changed")
def _no_status_update(order_store):
    assert not any(call["method"] == "update_status" for call in order_store.calls)
