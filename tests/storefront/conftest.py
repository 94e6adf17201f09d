import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain

from storefront.cart.management import AddToCart
from storefront.catalogue.management import AddProduct
from storefront.checkout.checkout import Checkout
from storefront.gateway import reset_gateway, set_gateway
from storefront.gateway.fake_adapter import FakeGateway
from storefront.notifications import reset_notifier, set_notifier
from storefront.notifications.channel.fake_email import FakeEmailAdapter
from storefront.notifications.service import NotificationService
from storefront.order.order import Order

BASE_URL = "http://shop.test"
SESSION_KEY = "session-001"
BUYER_EMAIL = "buyer@example.com"


class Mailbox:
    """Channel factory that hands the notifier fake adapters and keeps every one it built."""

    def __init__(self):
        self.channels: list[FakeEmailAdapter] = []

    def build(self, settings) -> FakeEmailAdapter:
        channel = FakeEmailAdapter(username=settings.email_user, password=settings.email_password)
        self.channels.append(channel)
        return channel

    @property
    def sent(self) -> list[dict]:
        return [email for channel in self.channels for email in channel.sent_emails]

    def to(self, address: str) -> list[dict]:
        return [email for email in self.sent if email["to"] == address]

    def subjects_to(self, address: str) -> list[str]:
        return [email["subject"] for email in self.to(address)]


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture(autouse=True)
def mailbox():
    box = Mailbox()
    set_notifier(NotificationService(channel_factory=box.build))
    yield box
    reset_notifier()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def add_product():
    def _add(name="Nike Air Max", price=120.0, **kwargs):
        return current_domain.process(AddProduct(name=name, price=price, **kwargs), asynchronous=False)

    return _add


@pytest.fixture()
def fill_cart():
    def _fill(*lines, session_key=SESSION_KEY):
        for product_id, quantity in lines:
            current_domain.process(
                AddToCart(session_key=session_key, product_id=product_id, quantity=quantity),
                asynchronous=False,
            )

    return _fill


@pytest.fixture()
def checkout():
    def _checkout(session_key=SESSION_KEY, buyer_email=BUYER_EMAIL, base_url=BASE_URL):
        return current_domain.process(
            Checkout(session_key=session_key, buyer_email=buyer_email, base_url=base_url),
            asynchronous=False,
        )

    return _checkout


@pytest.fixture()
def pending_order(add_product, fill_cart, checkout, gateway):
    """A Pending order for two Nike Air Max and one Adidas Ultraboost (£420.00)."""
    nike = add_product("Nike Air Max", 120.0)
    adidas = add_product("Adidas Ultraboost", 180.0)
    fill_cart((nike, 2), (adidas, 1))
    result = checkout()
    return current_domain.repository_for(Order).get(result.order_id)
