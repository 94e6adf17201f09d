"""Order cancellation and the compensating refund.

Cancellation is not guarded the way confirmation is: a Pending order moves to
Cancelled, and an already Cancelled order is accepted again so a failed refund
can be retried. Only Confirmed orders and unknown ids are rejected.

The refund always uses the idempotency key ``refund-{order_id}``, so a retry
after a lost response cannot refund twice at the provider. Refund failures
leave the order Cancelled and are logged with enough context for manual
reconciliation.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.gateway import get_gateway
from storefront.order.lookup import find_order
from storefront.order.notices import alert_seller, send_buyer_cancellation
from storefront.order.order import LinkOutcome, Order, OrderActor
from storefront.settings.provider import payment_settings

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    cancelled_by = String(choices=OrderActor, default=OrderActor.CUSTOMER.value)


def refund_idempotency_key(order_id) -> str:
    return f"refund-{order_id}"


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = find_order(repo, command.order_id)
        if order is None or order.is_confirmed:
            logger.info(
                "Cancellation rejected",
                order_id=str(command.order_id),
                status=order.status if order else None,
            )
            return LinkOutcome.INVALID_LINK

        if order.cancel(OrderActor(command.cancelled_by)):
            logger.info("Order cancelled", order_id=str(order.id), cancelled_by=command.cancelled_by)
        else:
            logger.info("Order already cancelled", order_id=str(order.id))

        if not order.is_refunded:
            _refund(order)
        repo.add(order)

        alert_seller(order, "cancelled")
        send_buyer_cancellation(order)

        return LinkOutcome.CANCELLED


def _refund(order) -> None:
    """Refund the captured payment of a cancelled order, if there is one."""
    gateway = get_gateway(payment_settings().secret_key)

    payment_reference = order.payment_reference
    if not payment_reference:
        status = gateway.retrieve_session(order.checkout_session_id)
        if not status.success:
            logger.error(
                "Could not determine payment state for refund",
                order_id=str(order.id),
                session_id=order.checkout_session_id,
                reason=status.failure_reason,
            )
            return
        if not status.paid:
            # Nothing was captured, so there is nothing to give back
            return
        payment_reference = status.payment_reference
        order.record_payment(payment_reference)

    result = gateway.create_refund(payment_reference, idempotency_key=refund_idempotency_key(order.id))
    if not result.success:
        logger.error(
            "Refund failed, manual reconciliation required",
            order_id=str(order.id),
            session_id=order.checkout_session_id,
            payment_reference=payment_reference,
            reason=result.failure_reason,
        )
        return

    order.record_refund(result.refund_id)
    logger.info("Refund issued", order_id=str(order.id), refund_id=result.refund_id)
