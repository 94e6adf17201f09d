"""Confirm and cancel URLs emailed to the buyer.

Both handlers are sync: they can call the payment provider and send email.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.api.schemas import OutcomeResponse
from storefront.order.cancellation import CancelOrder
from storefront.order.confirmation import ConfirmOrder
from storefront.order.order import LinkOutcome, OrderActor

order_link_router = APIRouter(prefix="/orders", tags=["orders"])


def _link_response(order_id: str, outcome: LinkOutcome):
    if outcome == LinkOutcome.INVALID_LINK:
        return JSONResponse(status_code=404, content={"outcome": outcome.value})
    return OutcomeResponse(outcome=outcome.value, order_id=order_id)


@order_link_router.get("/{order_id}/confirm", response_model=OutcomeResponse)
def confirm_via_link(order_id: str):
    command = ConfirmOrder(order_id=order_id, confirmed_by=OrderActor.CUSTOMER.value)
    return _link_response(order_id, current_domain.process(command, asynchronous=False))


@order_link_router.get("/{order_id}/cancel", response_model=OutcomeResponse)
def cancel_via_link(order_id: str):
    command = CancelOrder(order_id=order_id, cancelled_by=OrderActor.CUSTOMER.value)
    return _link_response(order_id, current_domain.process(command, asynchronous=False))
