"""Application tests for checkout: cart to Pending order and hosted payment page."""

from decimal import Decimal

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.cart.management import ClearCart
from storefront.catalogue.management import ArchiveProduct, UpdateProduct
from storefront.checkout.checkout import CheckoutResult
from storefront.errors import ConfigurationMissing, ExternalProviderFailure
from storefront.gateway.port import LineItem
from storefront.notifications import get_notifier
from storefront.order.order import Order, OrderStatus
from storefront.settings.management import UpdatePaymentSettings

BASE_URL = "http://shop.test"
BUYER_EMAIL = "buyer@example.com"
SELLER_EMAIL = "seller@example.com"


def _orders():
    return current_domain.repository_for(Order)._dao.query.all().items


class TestSuccessfulCheckout:
    def test_redirects_to_hosted_page(self, add_product, fill_cart, checkout, gateway):
        fill_cart((add_product("Nike Air Max", 120.0), 1))

        result = checkout()

        assert isinstance(result, CheckoutResult)
        assert result.redirect_url.startswith("https://checkout.fake.test/pay/")

    def test_persists_pending_order_with_provider_session(self, add_product, fill_cart, checkout, gateway):
        nike = add_product("Nike Air Max", 120.0)
        reebok = add_product("Reebok Classic", 80.0)
        fill_cart((nike, 1), (reebok, 2))

        result = checkout()

        order = current_domain.repository_for(Order).get(result.order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.total == 280.0
        assert order.buyer_email == BUYER_EMAIL
        assert order.checkout_session_id in gateway.sessions
        assert sorted((str(i.product_id), i.quantity) for i in order.items) == sorted([(nike, 1), (reebok, 2)])

    def test_sends_one_line_item_per_cart_line(self, add_product, fill_cart, checkout, gateway):
        fill_cart((add_product("Nike Air Max", 120.0), 1), (add_product("Reebok Classic", 80.0), 2))

        checkout()

        (call,) = gateway.calls_to("create_checkout_session")
        assert call["line_items"] == [
            LineItem(name="Nike Air Max", unit_amount=12000, quantity=1),
            LineItem(name="Reebok Classic", unit_amount=8000, quantity=2),
        ]
        assert call["currency"] == "gbp"
        assert call["customer_email"] == BUYER_EMAIL
        assert call["success_url"] == f"{BASE_URL}/success?session_id={{CHECKOUT_SESSION_ID}}"
        assert call["cancel_url"] == f"{BASE_URL}/cart"

    def test_total_is_rounded_per_line(self, add_product, fill_cart, checkout):
        fill_cart((add_product("Socks", 0.335), 3), (add_product("Laces", 0.335), 3))

        result = checkout()

        order = current_domain.repository_for(Order).get(result.order_id)
        assert Decimal(str(order.total)) == Decimal("2.02")

    def test_emails_receipt_and_seller_alert(self, add_product, fill_cart, checkout, mailbox):
        fill_cart((add_product("Nike Air Max", 120.0), 1))

        result = checkout()

        (receipt,) = mailbox.to(BUYER_EMAIL)
        assert receipt["subject"] == "Order Received"
        assert f"{BASE_URL}/orders/{result.order_id}/confirm" in receipt["body"]
        assert f"{BASE_URL}/orders/{result.order_id}/cancel" in receipt["body"]

        (alert,) = mailbox.to(SELLER_EMAIL)
        assert "New order" in alert["subject"]
        assert "Nike Air Max" in alert["body"]
        assert "£120.00" in alert["body"]

    def test_email_failure_does_not_fail_checkout(self, add_product, fill_cart, checkout, mailbox, monkeypatch):
        def _broken_channel(settings):
            raise ConnectionError("SMTP relay unreachable")

        monkeypatch.setattr(get_notifier(), "_channel_factory", _broken_channel)
        fill_cart((add_product("Nike Air Max", 120.0), 1))

        result = checkout()

        assert result.order_id is not None
        assert len(_orders()) == 1


class TestEmptyCart:
    def test_no_cart_redirects_back_to_cart(self, checkout, gateway):
        result = checkout()

        assert result.redirect_url == f"{BASE_URL}/cart"
        assert result.order_id is None
        assert gateway.calls == []
        assert _orders() == []

    def test_emptied_cart_redirects_back_to_cart(self, add_product, fill_cart, checkout, gateway):
        fill_cart((add_product(), 1))
        current_domain.process(ClearCart(session_key="session-001"), asynchronous=False)

        result = checkout()

        assert result.redirect_url == f"{BASE_URL}/cart"
        assert gateway.calls == []
        assert _orders() == []


class TestCheckoutFailures:
    def test_missing_secret_key(self, add_product, fill_cart, checkout, gateway, mailbox):
        current_domain.process(UpdatePaymentSettings(publishable_key="pk_test", secret_key=""), asynchronous=False)
        fill_cart((add_product("Runner", 50.0), 1))

        with pytest.raises(ConfigurationMissing):
            checkout()

        assert gateway.calls == []
        assert _orders() == []
        assert mailbox.sent == []

    def test_provider_failure_persists_nothing(self, add_product, fill_cart, checkout, gateway, mailbox):
        gateway.configure(should_succeed=False, failure_reason="card_declined")
        fill_cart((add_product("Runner", 50.0), 1))

        with pytest.raises(ExternalProviderFailure):
            checkout()

        assert _orders() == []
        assert mailbox.sent == []

    def test_buyer_email_required(self, add_product, fill_cart, checkout, gateway):
        fill_cart((add_product("Runner", 50.0), 1))

        with pytest.raises(ValidationError):
            checkout(buyer_email="")

        assert gateway.calls == []


class TestCartCommands:
    def test_archived_product_cannot_be_added(self, add_product, fill_cart):
        product_id = add_product()
        current_domain.process(ArchiveProduct(product_id=product_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            fill_cart((product_id, 1))

    def test_price_snapshot_survives_catalogue_edit(self, add_product, fill_cart, checkout, gateway):
        product_id = add_product("Nike Air Max", 120.0)
        fill_cart((product_id, 1))
        current_domain.process(UpdateProduct(product_id=product_id, price=150.0), asynchronous=False)

        checkout()

        (call,) = gateway.calls_to("create_checkout_session")
        assert call["line_items"][0].unit_amount == 12000
