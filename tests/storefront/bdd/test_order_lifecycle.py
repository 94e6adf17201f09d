"""BDD tests for checkout and the order lifecycle."""

from protean.utils.globals import current_domain
from pytest_bdd import scenarios, then, when

from storefront.errors import ConfigurationMissing
from storefront.order.cancellation import CancelOrder
from storefront.order.confirmation import ConfirmOrder

scenarios("features/order_lifecycle.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the buyer checks out")
def _(checkout, outcome):
    outcome["value"] = checkout()


@when("the buyer tries to check out")
def _(checkout, outcome):
    try:
        outcome["value"] = checkout()
    except ConfigurationMissing as exc:
        outcome["error"] = exc


@when("the buyer follows the confirm link")
def _(order, outcome):
    outcome["value"] = current_domain.process(ConfirmOrder(order_id=order.id), asynchronous=False)


@when("the buyer follows the cancel link")
def _(order, outcome):
    outcome["value"] = current_domain.process(CancelOrder(order_id=order.id), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("checkout fails because payment is not configured")
def _(outcome):
    assert isinstance(outcome["error"], ConfigurationMissing)
