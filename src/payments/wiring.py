"""Assembles the reconciliation and checkout services from the active adapters."""

from payments.checkout.service import CheckoutService
from payments.config import PaymentsSettings
from payments.gateway import get_gateway
from payments.notifier import get_notifier
from payments.order_store import get_order_store
from payments.reconciliation.orchestrator import ReconciliationOrchestrator


def get_orchestrator(settings: PaymentsSettings | None = None) -> ReconciliationOrchestrator:
    settings = settings or PaymentsSettings.from_env()
    return ReconciliationOrchestrator(
        gateway=get_gateway(),
        order_store=get_order_store(),
        notifier=get_notifier(),
        webhook_secret=settings.razorpay_webhook_secret,
    )


def get_checkout_service(settings: PaymentsSettings | None = None) -> CheckoutService:
    settings = settings or PaymentsSettings.from_env()
    return CheckoutService(gateway=get_gateway(), key_secret=settings.razorpay_key_secret)
