"""Notification Sender factory.

Uses the fake sender by default; the HTTP sender is configured via
NOTIFICATION_SERVICE_URL in production.
"""

from payments.config import PaymentsSettings
from payments.notifier.fake_adapter import FakeNotificationSender
from payments.notifier.http_adapter import HttpNotificationSender
from payments.notifier.port import NotificationSender

_current_notifier: NotificationSender | None = None


def build_notifier(settings: PaymentsSettings) -> NotificationSender:
    if settings.notification_service_url:
        return HttpNotificationSender(base_url=settings.notification_service_url, timeout=settings.http_timeout)
    return FakeNotificationSender()


def get_notifier() -> NotificationSender:
    """Return the current Notification Sender, built from the environment on first use."""
    global _current_notifier
    if _current_notifier is None:
        _current_notifier = build_notifier(PaymentsSettings.from_env())
    return _current_notifier


def set_notifier(notifier: NotificationSender) -> None:
    """Override the active Notification Sender (useful for tests)."""
    global _current_notifier
    _current_notifier = notifier


def reset_notifier() -> None:
    global _current_notifier
    _current_notifier = None
