"""Tests for gateway port/adapter integration."""

import pytest
import requests
from payments.config import PaymentsSettings
from payments.gateway import build_gateway, get_gateway, reset_gateway, set_gateway
from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import GatewayError, GatewayOrder, GatewayPayment
from payments.gateway.razorpay_adapter import RazorpayGateway
from payments.reconciliation.signature import compute_signature


class TestFakeGateway:
    def test_create_order_is_fetchable(self):
        gateway = FakeGateway()
        order = gateway.create_order(
            amount_minor_units=49900,
            currency="INR",
            receipt="order_42",
            notes={"order_id": 42},
        )
        assert isinstance(order, GatewayOrder)
        assert gateway.fetch_order(order.id) == order

    def test_unknown_order(self):
        assert FakeGateway().fetch_order("order_missing") is None

    def test_configured_failure_raises(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False, failure_reason="Gateway unavailable")

        with pytest.raises(GatewayError) as exc:
            gateway.fetch_order("order_any")

        assert exc.value.status_code == 503

    def test_signature_uses_key_secret(self):
        gateway = FakeGateway(key_secret="k")
        signature = compute_signature(b"order_1|pay_1", "k")

        assert gateway.verify_payment_signature("order_1", "pay_1", signature) is True
        assert gateway.verify_payment_signature("order_1", "pay_2", signature) is False


class TestGatewayFactory:
    def test_default_is_fake(self):
        reset_gateway()
        assert isinstance(get_gateway(), FakeGateway)

    def test_credentials_select_razorpay(self, monkeypatch):
        monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_test_key")
        monkeypatch.setenv("RAZORPAY_KEY_SECRET", "secret")
        reset_gateway()

        gateway = get_gateway()

        assert isinstance(gateway, RazorpayGateway)
        assert gateway.session.auth == ("rzp_test_key", "secret")

    def test_partial_credentials_stay_fake(self):
        settings = PaymentsSettings(razorpay_key_id="rzp_test_key")
        assert isinstance(build_gateway(settings), FakeGateway)

    def test_fake_uses_configured_key_secret(self):
        gateway = build_gateway(PaymentsSettings(razorpay_key_secret="secret"))

        assert isinstance(gateway, FakeGateway)
        assert gateway.key_secret == "secret"

    def test_fake_without_key_secret_verifies_nothing(self):
        gateway = build_gateway(PaymentsSettings())
        signature = compute_signature(b"order_1|pay_1", "fake_key_secret")

        assert gateway.verify_payment_signature("order_1", "pay_1", signature) is False

    def test_set_gateway_overrides(self):
        custom = FakeGateway(key_secret="custom")
        set_gateway(custom)
        assert get_gateway() is custom

    def test_get_gateway_is_cached(self):
        reset_gateway()
        assert get_gateway() is get_gateway()


@pytest.fixture()
def razorpay(http_session):
    return RazorpayGateway(
        key_id="rzp_test_key",
        key_secret="secret",
        api_url="https://gateway.test/v1/",
        timeout=2.5,
        session=http_session,
    )


class TestRazorpayGateway:
    def test_create_order(self, razorpay, http_session, http_response):
        http_session.request.return_value = http_response(
            200,
            {
                "id": "order_RZP1",
                "status": "created",
                "amount": 49900,
                "currency": "INR",
                "receipt": "order_42",
                "notes": {"order_id": "42"},
            },
        )

        order = razorpay.create_order(49900, "INR", "order_42", {"order_id": 42})

        assert order == GatewayOrder(
            id="order_RZP1",
            status="created",
            amount=49900,
            currency="INR",
            receipt="order_42",
            notes={"order_id": "42"},
        )
        http_session.request.assert_called_once_with(
            "POST",
            "https://gateway.test/v1/orders",
            timeout=2.5,
            json={"amount": 49900, "currency": "INR", "receipt": "order_42", "notes": {"order_id": 42}},
        )

    def test_fetch_order_with_empty_notes(self, razorpay, http_session, http_response):
        http_session.request.return_value = http_response(200, {"id": "order_RZP1", "receipt": "99", "notes": []})

        order = razorpay.fetch_order("order_RZP1")

        assert order.receipt == "99"
        assert order.notes == {}

    @pytest.mark.parametrize(
        "status_code, body",
        [
            (404, {"error": {"description": "not found"}}),
            (400, {"error": {"code": "BAD_REQUEST_ERROR", "description": "The id provided does not exist"}}),
        ],
    )
    def test_missing_order(self, razorpay, http_session, http_response, status_code, body):
        http_session.request.return_value = http_response(status_code, body)
        assert razorpay.fetch_order("order_missing") is None

    def test_other_client_error_raises(self, razorpay, http_session, http_response):
        http_session.request.return_value = http_response(
            400, {"error": {"code": "BAD_REQUEST_ERROR", "description": "amount is required"}}
        )

        with pytest.raises(GatewayError) as exc:
            razorpay.fetch_order("order_RZP1")

        assert exc.value.status_code == 400

    def test_server_error_raises(self, razorpay, http_session, http_response):
        http_session.request.return_value = http_response(500, {})

        with pytest.raises(GatewayError) as exc:
            razorpay.create_order(100, "INR", "order_1", {})

        assert exc.value.status_code == 500

    def test_transport_error_raises(self, razorpay, http_session):
        http_session.request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(GatewayError, match="connection refused"):
            razorpay.fetch_payment("pay_1")

    def test_non_json_body_raises(self, razorpay, http_session, http_response):
        http_session.request.return_value = http_response(200, b"<html>oops</html>")

        with pytest.raises(GatewayError):
            razorpay.fetch_payment("pay_1")

    def test_fetch_payment(self, razorpay, http_session, http_response):
        http_session.request.return_value = http_response(
            200,
            {
                "id": "pay_1",
                "order_id": "order_RZP1",
                "status": "captured",
                "amount": 49900,
                "currency": "INR",
                "email": "buyer@example.com",
                "method": "upi",
            },
        )

        payment = razorpay.fetch_payment("pay_1")

        assert isinstance(payment, GatewayPayment)
        assert payment.status == "captured"
        assert payment.method == "upi"

    def test_verify_payment_signature_needs_no_network(self, razorpay, http_session):
        signature = compute_signature(b"order_RZP1|pay_1", "secret")

        assert razorpay.verify_payment_signature("order_RZP1", "pay_1", signature) is True
        http_session.request.assert_not_called()
