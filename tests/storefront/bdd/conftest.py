"""Shared BDD fixtures and step definitions for the order lifecycle."""

from decimal import Decimal

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from structlog.testing import capture_logs

from storefront.order.cancellation import CancelOrder
from storefront.order.order import Order
from storefront.settings.management import UpdatePaymentSettings

BUYER_EMAIL = "buyer@example.com"
SELLER_EMAIL = "seller@example.com"


@pytest.fixture()
def catalogue():
    """Product ids by name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the result of the When step."""
    return {"value": None, "error": None, "emails_before": 0}


@pytest.fixture()
def captured_logs():
    """structlog entries emitted from the step that requested this fixture onwards."""
    with capture_logs() as logs:
        yield logs


def _orders():
    return current_domain.repository_for(Order)._dao.query.all().items


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.parse('the catalogue has "{name}" priced at {price:f}'))
def _(catalogue, add_product, name, price):
    catalogue[name] = add_product(name, price)


@given(parsers.parse('the cart holds {quantity:d} "{name}"'))
def _(catalogue, fill_cart, quantity, name):
    fill_cart((catalogue[name], quantity))


@given("the payment secret key is missing")
def _():
    current_domain.process(UpdatePaymentSettings(publishable_key="pk_test", secret_key=""), asynchronous=False)


@given("the buyer has placed an order", target_fixture="order")
def _(catalogue, fill_cart, checkout):
    fill_cart((catalogue["Nike Air Max"], 1))
    result = checkout()
    return current_domain.repository_for(Order).get(result.order_id)


@given("the order has been paid")
def _(order, gateway):
    gateway.mark_paid(order.checkout_session_id, payment_reference="pi_bdd_001")


@given("the payment provider rejects refunds")
def _(gateway, captured_logs):
    gateway.configure(refund_should_succeed=False, failure_reason="refund_declined")


@given("the buyer has cancelled the order")
def _(order, outcome, mailbox):
    current_domain.process(CancelOrder(order_id=order.id), asynchronous=False)
    outcome["emails_before"] = len(mailbox.sent)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('the outcome is "{expected}"'))
def _(outcome, expected):
    assert outcome["value"].value == expected


@then(parsers.parse('the order is "{status}"'))
def _(status):
    (order,) = _orders()
    assert order.status == status


@then(parsers.parse("the order total is {total}"))
def _(total):
    (order,) = _orders()
    assert Decimal(str(order.total)).quantize(Decimal("0.01")) == Decimal(total)


@then("no order exists")
def _():
    assert _orders() == []


@then("no refund is recorded")
def _():
    (order,) = _orders()
    assert order.refund_reference is None


@then("the refund failure is logged for manual reconciliation")
def _(captured_logs):
    (order,) = _orders()
    (entry,) = [e for e in captured_logs if e["event"] == "Refund failed, manual reconciliation required"]
    assert entry["log_level"] == "error"
    assert entry["order_id"] == str(order.id)
    assert entry["session_id"] == order.checkout_session_id
    assert entry["payment_reference"] == "pi_bdd_001"
    assert entry["reason"] == "refund_declined"


@then(parsers.parse("exactly {count:d} refund was requested"))
def _(gateway, count):
    assert len(gateway.calls_to("create_refund")) == count


@then("the payment provider was not called")
def _(gateway):
    assert gateway.calls == []


@then(parsers.parse('the buyer received a "{subject}" email'))
def _(mailbox, subject):
    assert subject in mailbox.subjects_to(BUYER_EMAIL)


@then(parsers.parse('the seller received {count:d} "{prefix}" alert'))
def _(mailbox, count, prefix):
    alerts = [s for s in mailbox.subjects_to(SELLER_EMAIL) if s.startswith(prefix)]
    assert len(alerts) == count


@then("no further email was sent")
def _(mailbox, outcome):
    assert len(mailbox.sent) == outcome["emails_before"]
