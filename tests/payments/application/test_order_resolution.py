"""Tests for the three-tier order reference resolver."""

import pytest
from payments.gateway.port import GatewayOrder
from payments.order_store.port import OrderLookupResult
from payments.reconciliation.resolver import OrderReferenceResolver


@pytest.fixture()
def resolver(gateway, order_store):
    return OrderReferenceResolver(gateway, order_store)


def _gateway_order(receipt, gateway_order_id="order_GW001"):
    return GatewayOrder(
        id=gateway_order_id,
        status="paid",
        amount=50000,
        currency="INR",
        receipt=receipt,
    )


class TestNotesTier:
    def test_notes_order_id_wins_without_network_calls(self, resolver, gateway, order_store):
        assert resolver.resolve("order_GW001", {"order_id": "42"}) == 42
        assert gateway.calls == []
        assert order_store.calls == []

    def test_integer_notes_value(self, resolver):
        assert resolver.resolve("order_GW001", {"order_id": 42}) == 42

    @pytest.mark.parametrize("value", ["0", "-3", 0, -3, "abc", None])
    def test_invalid_notes_fall_through(self, resolver, gateway, value):
        gateway.add_order(_gateway_order("order_8"))
        assert resolver.resolve("order_GW001", {"order_id": value}) == 8


class TestReceiptTier:
    def test_prefixed_receipt(self, resolver, gateway):
        gateway.add_order(_gateway_order("order_77"))
        assert resolver.resolve("order_GW001", {}) == 77

    def test_bare_numeric_receipt(self, resolver, gateway):
        gateway.add_order(_gateway_order("99"))
        assert resolver.resolve("order_GW001") == 99

    def test_receipt_tier_skips_order_store(self, resolver, gateway, order_store):
        gateway.add_order(_gateway_order("order_77"))
        order_store.add_order(5, gateway_order_id="order_GW001")

        assert resolver.resolve("order_GW001") == 77
        assert order_store.calls == []


class TestOrderStoreTier:
    def test_unparsable_receipt_falls_back_to_order_store(self, resolver, gateway, order_store):
        gateway.add_order(_gateway_order("rcpt-abc"))
        order_store.add_order(5, gateway_order_id="order_GW001")

        assert resolver.resolve("order_GW001") == 5

    def test_unknown_gateway_order_falls_back_to_order_store(self, resolver, order_store):
        order_store.add_order(5, gateway_order_id="order_GW001")
        assert resolver.resolve("order_GW001") == 5

    def test_gateway_error_falls_back_to_order_store(self, resolver, gateway, order_store):
        gateway.configure(should_succeed=False)
        order_store.add_order(5, gateway_order_id="order_GW001")

        assert resolver.resolve("order_GW001") == 5

    def test_non_positive_store_id_is_rejected(self, resolver, order_store, monkeypatch):
        monkeypatch.setattr(
            order_store,
            "find_by_external_reference",
            lambda gateway_order_id: OrderLookupResult(success=True, order_id=0),
        )
        assert resolver.resolve("order_GW001") is None


class TestUnresolved:
    def test_all_tiers_fail(self, resolver, gateway, order_store):
        gateway.add_order(_gateway_order("rcpt-abc"))
        assert resolver.resolve("order_GW001", {"order_id": "x"}) is None

    def test_everything_unavailable(self, resolver, gateway, order_store):
        gateway.configure(should_succeed=False)
        order_store.configure(should_succeed=False)
        assert resolver.resolve("order_GW001") is None

    def test_empty_gateway_order_id_makes_no_calls(self, resolver, gateway, order_store):
        assert resolver.resolve("", {}) is None
        assert gateway.calls == []
        assert order_store.calls == []

    def test_step_that_raises_does_not_escape(self, resolver, order_store, monkeypatch):
        def _boom(gateway_order_id):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(order_store, "find_by_external_reference", _boom)
        assert resolver.resolve("order_GW001") is None
