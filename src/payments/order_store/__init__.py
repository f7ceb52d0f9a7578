"""Order Store factory.

Provides get_order_store() / set_order_store() to swap implementations:
- FakeOrderStore for development and testing
- HttpOrderStore when ORDER_SERVICE_URL is set
"""

from payments.config import PaymentsSettings
from payments.order_store.fake_adapter import FakeOrderStore
from payments.order_store.http_adapter import HttpOrderStore
from payments.order_store.port import OrderStore

_current_store: OrderStore | None = None


def build_order_store(settings: PaymentsSettings) -> OrderStore:
    if settings.order_service_url:
        return HttpOrderStore(base_url=settings.order_service_url, timeout=settings.http_timeout)
    return FakeOrderStore()


def get_order_store() -> OrderStore:
    """Return the current Order Store, built from the environment on first use."""
    global _current_store
    if _current_store is None:
        _current_store = build_order_store(PaymentsSettings.from_env())
    return _current_store


def set_order_store(store: OrderStore) -> None:
    """Override the active Order Store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_order_store() -> None:
    global _current_store
    _current_store = None
