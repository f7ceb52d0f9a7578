"""Notification Sender port — the notification service as seen from Payments."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class DeliveryResult:
    """Result of handing a message to the notification service."""

    success: bool
    message_id: str | None = None
    error: str | None = None


class NotificationSender(ABC):
    """Abstract interface for customer email notifications."""

    @abstractmethod
    def send_order_confirmation(self, email: str, order_id: int, details: str) -> DeliveryResult:
        """Send the templated order-confirmation email."""
        ...

    @abstractmethod
    def send_email(self, to: str, subject: str, body: str) -> DeliveryResult:
        """Send a free-form email."""
        ...
