"""Stress test scenarios for webhook ingestion.

WebhookFloodUser delivers captured events as fast as possible.
RedeliveryUser replays the same delivery several times, as the gateway does
when acknowledgements are slow.
"""

import random

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import order_id, webhook_body, webhook_headers


class WebhookFloodUser(HttpUser):
    """Stress test: maximum webhook throughput.

    Every delivery carries its order id in the notes, so no gateway or
    ordering service lookups are needed to resolve it.
    """

    wait_time = constant_pacing(0.1)  # ~10 requests/sec per user

    @task(8)
    def captured(self):
        body = webhook_body("payment.captured", f"order_{random.getrandbits(40):x}", internal_order_id=order_id())
        self.client.post("/payments/webhook", data=body, headers=webhook_headers(body), name="[STRESS] captured")

    @task(2)
    def ignored(self):
        body = webhook_body("refund.processed", f"order_{random.getrandbits(40):x}")
        self.client.post("/payments/webhook", data=body, headers=webhook_headers(body), name="[STRESS] ignored")


class RedeliveryUser(HttpUser):
    """Replays one delivery several times in a row."""

    wait_time = constant_pacing(0.5)

    @task
    def redeliver(self):
        body = webhook_body("payment.captured", f"order_{random.getrandbits(40):x}", internal_order_id=order_id())
        headers = webhook_headers(body)
        for _ in range(random.randint(2, 5)):
            self.client.post("/payments/webhook", data=body, headers=headers, name="[STRESS] redelivery")
