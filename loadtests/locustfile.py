"""Payments Load Testing — Locust entry point.

Discovers all user classes from the scenarios package.
Run specific scenarios with Locust's class selection or use --tags.

Set LOADTEST_WEBHOOK_SECRET and LOADTEST_KEY_SECRET to the server's
RAZORPAY_WEBHOOK_SECRET and RAZORPAY_KEY_SECRET so webhook deliveries and
checkout signatures are signed correctly.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Checkout journeys only:
    locust -f loadtests/locustfile.py PaymentsUser

    # Stress test:
    locust -f loadtests/locustfile.py WebhookFloodUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py PaymentsUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.data_generators import KEY_SECRET, WEBHOOK_SECRET
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.payments import PaymentsUser  # noqa: F401
from loadtests.scenarios.stress import RedeliveryUser, WebhookFloodUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Fires globally for all scenarios — no per-task wiring needed.
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Check the target is up and log a marker when the load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    if not WEBHOOK_SECRET:
        print("[LOADTEST] LOADTEST_WEBHOOK_SECRET not set, webhooks are sent unsigned")
    if not KEY_SECRET:
        print("[LOADTEST] LOADTEST_KEY_SECRET not set, checkout verification will fail")
    try:
        resp = requests.get(f"{environment.host}/health", timeout=5)
        print(f"[LOADTEST] Health: {resp.status_code} {resp.text[:200]}")
    except requests.RequestException as e:
        print(f"[LOADTEST] Health check failed: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(**_kwargs):
    """Log a marker when the load test ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}\n")
