import os
from pathlib import Path

import pytest

# Gateway credentials and collaborator URLs switch the adapters to their
# HTTP implementations; tests always run against the in-memory fakes.
_ADAPTER_ENV_VARS = (
    "RAZORPAY_KEY_ID",
    "RAZORPAY_KEY_SECRET",
    "RAZORPAY_WEBHOOK_SECRET",
    "ORDER_SERVICE_URL",
    "NOTIFICATION_SERVICE_URL",
)


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def run_around_tests(monkeypatch):
    """Fixture to isolate adapter singletons and environment between tests"""
    for name in _ADAPTER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    yield

    from payments.gateway import reset_gateway
    from payments.notifier import reset_notifier
    from payments.order_store import reset_order_store

    reset_gateway()
    reset_order_store()
    reset_notifier()
