"""Payment reconciliation on the provider's success redirect.

When the buyer returns from the hosted payment page the session id in the
redirect is checked against the provider. A paid session confirms the order on
the provider's behalf; anything else leaves it Pending.
"""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.gateway import get_gateway
from storefront.order.notices import send_buyer_confirmation
from storefront.order.order import LinkOutcome, Order, OrderActor
from storefront.settings.provider import payment_settings

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class ReconcilePayment:
    checkout_session_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=Order)
class ReconcilePaymentHandler:
    @handle(ReconcilePayment)
    def reconcile_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_by_checkout_session(command.checkout_session_id)
        if order is None:
            logger.info("Unknown checkout session", session_id=command.checkout_session_id)
            return LinkOutcome.INVALID_LINK
        if order.is_confirmed:
            return LinkOutcome.ALREADY_CONFIRMED
        if order.is_cancelled:
            return LinkOutcome.CANCELLED

        status = get_gateway(payment_settings().secret_key).retrieve_session(order.checkout_session_id)
        if not status.success:
            logger.warning(
                "Payment session lookup failed",
                order_id=str(order.id),
                session_id=order.checkout_session_id,
                reason=status.failure_reason,
            )
            return LinkOutcome.PAYMENT_PENDING
        if not status.paid:
            return LinkOutcome.PAYMENT_PENDING

        if status.payment_reference:
            order.record_payment(status.payment_reference)
        order.confirm(OrderActor.PROVIDER)
        repo.add(order)
        logger.info("Order confirmed by payment provider", order_id=str(order.id))

        send_buyer_confirmation(order)
        return LinkOutcome.CONFIRMED
