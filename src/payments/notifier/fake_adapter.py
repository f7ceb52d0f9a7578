"""Fake notification sender — records messages for testing."""

from uuid import uuid4

from payments.notifier.port import DeliveryResult, NotificationSender


class FakeNotificationSender(NotificationSender):
    """Notification sender that records messages in memory for test assertions."""

    def __init__(self):
        self.sent_confirmations: list[dict] = []
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Email delivery failed"):
        """Configure the fake sender behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send_order_confirmation(self, email: str, order_id: int, details: str) -> DeliveryResult:
        if not self.should_succeed:
            return DeliveryResult(success=False, error=self.failure_reason)

        message_id = f"confirm-{uuid4().hex[:12]}"
        self.sent_confirmations.append(
            {"message_id": message_id, "email": email, "order_id": order_id, "details": details}
        )
        return DeliveryResult(success=True, message_id=message_id)

    def send_email(self, to: str, subject: str, body: str) -> DeliveryResult:
        if not self.should_succeed:
            return DeliveryResult(success=False, error=self.failure_reason)

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append({"message_id": message_id, "to": to, "subject": subject, "body": body})
        return DeliveryResult(success=True, message_id=message_id)

    def reset(self):
        """Clear sent messages (useful between tests)."""
        self.sent_confirmations.clear()
        self.sent_emails.clear()
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
