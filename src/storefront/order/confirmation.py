"""Order confirmation — by the buyer's emailed link or by an admin.

Confirmation is guarded: only a Pending order can be confirmed. Anything else,
including an unknown id, reports an invalid link and changes nothing.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.lookup import find_order
from storefront.order.notices import alert_seller, send_buyer_confirmation
from storefront.order.order import LinkOutcome, Order, OrderActor, OrderStatus

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class ConfirmOrder:
    order_id = Identifier(required=True)
    confirmed_by = String(choices=OrderActor, default=OrderActor.CUSTOMER.value)


@storefront.command_handler(part_of=Order)
class ConfirmOrderHandler:
    @handle(ConfirmOrder)
    def confirm_order(self, command):
        repo = current_domain.repository_for(Order)
        order = find_order(repo, command.order_id)
        if order is None or not order.can_transition_to(OrderStatus.CONFIRMED):
            logger.info(
                "Confirmation rejected",
                order_id=str(command.order_id),
                status=order.status if order else None,
            )
            return LinkOutcome.INVALID_LINK

        actor = OrderActor(command.confirmed_by)
        order.confirm(actor)
        repo.add(order)
        logger.info("Order confirmed", order_id=str(order.id), confirmed_by=actor.value)

        # The transition above happens once, so the seller hears about it once
        if actor == OrderActor.CUSTOMER:
            alert_seller(order, "confirmed")
        send_buyer_confirmation(order)

        return LinkOutcome.CONFIRMED
