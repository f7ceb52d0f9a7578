"""Runtime settings for the Payments domain.

Read once from environment variables. Gateway credentials and collaborator
URLs are optional: when unset, the wiring layer falls back to the in-memory
fake adapters (development and test).
"""

import os
from dataclasses import dataclass

DEFAULT_RAZORPAY_API_URL = "https://api.razorpay.com/v1"
DEFAULT_HTTP_TIMEOUT = 5.0


@dataclass(frozen=True)
class PaymentsSettings:
    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""
    razorpay_webhook_secret: str = ""
    razorpay_api_url: str = DEFAULT_RAZORPAY_API_URL
    order_service_url: str = ""
    notification_service_url: str = ""
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_env(cls) -> "PaymentsSettings":
        return cls(
            razorpay_key_id=os.environ.get("RAZORPAY_KEY_ID", ""),
            razorpay_key_secret=os.environ.get("RAZORPAY_KEY_SECRET", ""),
            razorpay_webhook_secret=os.environ.get("RAZORPAY_WEBHOOK_SECRET", ""),
            razorpay_api_url=os.environ.get("RAZORPAY_API_URL", DEFAULT_RAZORPAY_API_URL),
            order_service_url=os.environ.get("ORDER_SERVICE_URL", ""),
            notification_service_url=os.environ.get("NOTIFICATION_SERVICE_URL", ""),
            http_timeout=float(os.environ.get("PAYMENTS_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
        )

    @property
    def gateway_configured(self) -> bool:
        return bool(self.razorpay_key_id and self.razorpay_key_secret)
