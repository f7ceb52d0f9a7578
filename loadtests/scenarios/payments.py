"""Payments load test scenarios.

Stateful SequentialTaskSet journeys covering the checkout happy path with
a captured webhook, a failed payment, and a forged verification attempt.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    failure_reason,
    gateway_order_data,
    gateway_payment_id,
    verification_data,
    webhook_body,
    webhook_headers,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState


class _CheckoutJourney(SequentialTaskSet):
    """Shared first step: create a gateway order for a fresh internal order."""

    def on_start(self):
        self.state = CheckoutState()

    @task
    def create_gateway_order(self):
        payload = gateway_order_data()
        self.state.order_id = payload["order_id"]
        with self.client.post(
            "/payments/gateway-orders",
            json=payload,
            catch_response=True,
            name="POST /payments/gateway-orders",
        ) as resp:
            if resp.status_code == 201:
                data = resp.json()
                self.state.gateway_order_id = data["gateway_order_id"]
                self.state.amount_minor_units = data["amount"]
            else:
                resp.failure(f"Create gateway order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    def deliver(self, event: str, name: str, with_notes: bool = True, reason: str | None = None):
        body = webhook_body(
            event,
            self.state.gateway_order_id,
            internal_order_id=self.state.order_id if with_notes else None,
            amount=self.state.amount_minor_units,
            failure_reason=reason,
        )
        with self.client.post(
            "/payments/webhook",
            data=body,
            headers=webhook_headers(body),
            catch_response=True,
            name=name,
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Webhook rejected: {resp.status_code} — {extract_error_detail(resp)}")


class CapturedPaymentJourney(_CheckoutJourney):
    """Create Gateway Order -> Verify -> Webhook Captured.

    The happy path: the customer pays and the gateway confirms.
    """

    @task
    def verify(self):
        self.state.payment_id = gateway_payment_id()
        with self.client.post(
            "/payments/verify",
            json=verification_data(self.state.gateway_order_id, self.state.payment_id),
            catch_response=True,
            name="POST /payments/verify",
        ) as resp:
            if resp.status_code != 200 or resp.json().get("status") != "SUCCESS":
                resp.failure(f"Verification failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def webhook_captured(self):
        self.deliver("payment.captured", "POST /payments/webhook (captured)")

    @task
    def done(self):
        self.interrupt()


class FailedPaymentJourney(_CheckoutJourney):
    """Create Gateway Order -> Webhook Failed.

    No notes on the payment, so the order is resolved through the receipt.
    """

    @task
    def webhook_failed(self):
        self.deliver(
            "payment.failed",
            "POST /payments/webhook (failed)",
            with_notes=False,
            reason=failure_reason(),
        )

    @task
    def done(self):
        self.interrupt()


class ForgedVerificationJourney(_CheckoutJourney):
    """Create Gateway Order -> Verify with a tampered signature."""

    @task
    def verify_forged(self):
        with self.client.post(
            "/payments/verify",
            json=verification_data(self.state.gateway_order_id, gateway_payment_id(), forged=True),
            catch_response=True,
            name="POST /payments/verify (forged)",
        ) as resp:
            if resp.status_code == 200 and resp.json().get("status") == "FAILED":
                resp.success()
            else:
                resp.failure(f"Forged signature not rejected: {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class PaymentsUser(HttpUser):
    """Locust user simulating checkout and webhook traffic.

    Weighted distribution:
    - 60% Captured payment (most common)
    - 30% Failed payment
    - 10% Forged verification
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        CapturedPaymentJourney: 6,
        FailedPaymentJourney: 3,
        ForgedVerificationJourney: 1,
    }
