"""Tests for payment gateway adapters and the gateway factory."""

import warnings
from types import SimpleNamespace

import pytest
import stripe

from storefront.gateway import get_gateway, reset_gateway, set_gateway
from storefront.gateway.fake_adapter import FakeGateway
from storefront.gateway.port import LineItem
from storefront.gateway.stripe_adapter import StripeGateway

LINE_ITEMS = [LineItem(name="Nike Air Max", unit_amount=12000, quantity=1)]


class _StubSessions:
    def __init__(self, payment_status="paid", payment_intent="pi_123", error=None):
        self.created = []
        self.payment_status = payment_status
        self.payment_intent = payment_intent
        self.error = error

    def create(self, params):
        if self.error:
            raise self.error
        self.created.append(params)
        return SimpleNamespace(id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1")

    def retrieve(self, session_id):
        if self.error:
            raise self.error
        return SimpleNamespace(id=session_id, payment_status=self.payment_status, payment_intent=self.payment_intent)


class _StubRefunds:
    def __init__(self, status="succeeded", error=None):
        self.created = []
        self.status = status
        self.error = error

    def create(self, params, options):
        if self.error:
            raise self.error
        self.created.append({"params": params, "options": options})
        return SimpleNamespace(id="re_123", status=self.status, failure_reason="expired_or_canceled_card")


def _stripe_gateway(sessions=None, refunds=None):
    gateway = StripeGateway("sk_test_123", timeout=5)
    gateway._client = SimpleNamespace(
        v1=SimpleNamespace(
            checkout=SimpleNamespace(sessions=sessions or _StubSessions()),
            refunds=refunds or _StubRefunds(),
        )
    )
    return gateway


class TestStripeGateway:
    def test_client_services_resolve_without_deprecation(self):
        client = StripeGateway("sk_test_123")._client
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            assert client.v1.checkout.sessions is not None
            assert client.v1.refunds is not None

    def test_create_checkout_session(self):
        sessions = _StubSessions()
        gateway = _stripe_gateway(sessions=sessions)

        result = gateway.create_checkout_session(
            LINE_ITEMS, "http://shop.test/success", "http://shop.test/cart", "GBP", customer_email="b@example.com"
        )

        assert result.success is True
        assert result.hosted_url == "https://checkout.stripe.com/c/pay/cs_test_1"
        (params,) = sessions.created
        assert params["mode"] == "payment"
        assert params["customer_email"] == "b@example.com"
        assert params["line_items"][0]["price_data"] == {
            "currency": "gbp",
            "product_data": {"name": "Nike Air Max"},
            "unit_amount": 12000,
        }

    def test_create_checkout_session_failure(self):
        gateway = _stripe_gateway(sessions=_StubSessions(error=stripe.APIConnectionError("timed out")))

        result = gateway.create_checkout_session(LINE_ITEMS, "s", "c", "gbp")

        assert result.success is False
        assert "timed out" in result.failure_reason

    def test_retrieve_paid_session(self):
        result = _stripe_gateway().retrieve_session("cs_test_1")

        assert result.success is True
        assert result.paid is True
        assert result.payment_reference == "pi_123"

    def test_retrieve_expanded_payment_intent(self):
        sessions = _StubSessions(payment_intent=SimpleNamespace(id="pi_expanded"))
        assert _stripe_gateway(sessions=sessions).retrieve_session("cs_test_1").payment_reference == "pi_expanded"

    def test_retrieve_unpaid_session(self):
        sessions = _StubSessions(payment_status="unpaid", payment_intent=None)
        result = _stripe_gateway(sessions=sessions).retrieve_session("cs_test_1")

        assert result.success is True
        assert result.paid is False

    def test_refund_passes_idempotency_key(self):
        refunds = _StubRefunds()
        result = _stripe_gateway(refunds=refunds).create_refund("pi_123", idempotency_key="refund-ord-1")

        assert result.success is True
        assert result.refund_id == "re_123"
        assert refunds.created == [
            {"params": {"payment_intent": "pi_123"}, "options": {"idempotency_key": "refund-ord-1"}}
        ]

    def test_failed_refund_status(self):
        result = _stripe_gateway(refunds=_StubRefunds(status="failed")).create_refund("pi_123", "refund-ord-1")

        assert result.success is False
        assert result.failure_reason == "expired_or_canceled_card"

    def test_refund_error(self):
        refunds = _StubRefunds(error=stripe.InvalidRequestError("charge_already_refunded", param=None))
        result = _stripe_gateway(refunds=refunds).create_refund("pi_123", "refund-ord-1")

        assert result.success is False


class TestFakeGateway:
    def test_refund_replays_by_idempotency_key(self):
        gateway = FakeGateway()
        first = gateway.create_refund("pi_1", "refund-ord-1")
        second = gateway.create_refund("pi_1", "refund-ord-1")

        assert first == second

    def test_session_paid_after_mark_paid(self):
        gateway = FakeGateway()
        session = gateway.create_checkout_session(LINE_ITEMS, "s", "c", "gbp")
        gateway.mark_paid(session.session_id, payment_reference="pi_9")

        status = gateway.retrieve_session(session.session_id)
        assert status.paid is True
        assert status.payment_reference == "pi_9"


class TestGatewayFactory:
    @pytest.fixture(autouse=True)
    def _clean_factory(self):
        reset_gateway()
        yield
        reset_gateway()

    def test_override_wins(self):
        fake = FakeGateway()
        set_gateway(fake)
        assert get_gateway("sk_anything") is fake

    def test_fake_adapter_from_environment(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_ADAPTER", "fake")
        assert get_gateway("sk_test") is get_gateway("sk_test")

    def test_stripe_adapter_from_environment(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_ADAPTER", "stripe")
        assert isinstance(get_gateway("sk_test"), StripeGateway)
