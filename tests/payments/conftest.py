import json
from unittest.mock import MagicMock

import pytest
import requests
from payments.gateway import set_gateway
from payments.gateway.fake_adapter import FakeGateway
from payments.notifier import set_notifier
from payments.notifier.fake_adapter import FakeNotificationSender
from payments.order_store import set_order_store
from payments.order_store.fake_adapter import FakeOrderStore
from payments.reconciliation.signature import compute_signature
from protean.integrations.pytest import DomainFixture

WEBHOOK_SECRET = "whsec_test_secret"


@pytest.fixture(scope="session")
def payments_bed():
    from payments.domain import payments

    bed = DomainFixture(payments)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(payments_bed):
    with payments_bed.domain_context():
        yield


@pytest.fixture()
def webhook_secret():
    return WEBHOOK_SECRET


@pytest.fixture()
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def order_store():
    fake = FakeOrderStore()
    set_order_store(fake)
    return fake


@pytest.fixture()
def notifier():
    fake = FakeNotificationSender()
    set_notifier(fake)
    return fake


@pytest.fixture()
def webhook_body():
    """Build a gateway webhook body as raw bytes."""

    def _build(
        event="payment.captured",
        payment_id="pay_TEST0001",
        order_id="order_TEST0001",
        status="captured",
        amount=50000,
        currency="INR",
        email=None,
        error_code=None,
        error_description=None,
        notes=None,
    ) -> bytes:
        entity = {
            "id": payment_id,
            "entity": "payment",
            "order_id": order_id,
            "status": status,
            "amount": amount,
            "currency": currency,
            "notes": notes if notes is not None else [],
        }
        if email is not None:
            entity["email"] = email
        if error_code is not None:
            entity["error_code"] = error_code
        if error_description is not None:
            entity["error_description"] = error_description

        return json.dumps(
            {
                "entity": "event",
                "event": event,
                "contains": ["payment"],
                "payload": {"payment": {"entity": entity}},
            }
        ).encode("utf-8")

    return _build


@pytest.fixture()
def sign():
    """Sign a webhook body the way the gateway does."""

    def _sign(body: bytes, secret: str = WEBHOOK_SECRET) -> str:
        return compute_signature(body, secret)

    return _sign


@pytest.fixture()
def http_response():
    """Build a real requests.Response with a canned status and body."""

    def _build(status_code: int = 200, body=None) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        if isinstance(body, (bytes, str)):
            response._content = body.encode("utf-8") if isinstance(body, str) else body
        else:
            response._content = json.dumps(body if body is not None else {}).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
        return response

    return _build


@pytest.fixture()
def http_session():
    return MagicMock(spec=requests.Session)
