"""HTTP adapter for the notification service."""

import requests
import structlog

from payments.notifier.port import DeliveryResult, NotificationSender

logger = structlog.get_logger(__name__)


class HttpNotificationSender(NotificationSender):
    """Notification Sender backed by the notification service's HTTP API."""

    def __init__(self, base_url: str, timeout: float, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def send_order_confirmation(self, email: str, order_id: int, details: str) -> DeliveryResult:
        return self._post(
            "/api/notifications/order-confirmation",
            {"email": email, "orderId": order_id, "orderDetails": details},
            recipient=email,
        )

    def send_email(self, to: str, subject: str, body: str) -> DeliveryResult:
        return self._post(
            "/api/notifications/email",
            {"to": to, "subject": subject, "body": body},
            recipient=to,
        )

    def _post(self, path: str, payload: dict, recipient: str) -> DeliveryResult:
        try:
            response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Notification request failed", path=path, recipient=recipient, error=str(exc))
            return DeliveryResult(success=False, error=str(exc))

        if not response.ok:
            logger.warning(
                "Notification service rejected message",
                path=path,
                recipient=recipient,
                status_code=response.status_code,
            )
            return DeliveryResult(success=False, error=f"Notification service returned {response.status_code}")

        logger.info("Notification sent", path=path, recipient=recipient)
        return DeliveryResult(success=True)
