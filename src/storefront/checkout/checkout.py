"""Checkout turns a session's cart into a Pending order and a hosted payment page.

Flow:
    1. Price the cart: each line rounded half-up to the penny, then summed
    2. Ask the payment provider for a hosted checkout session
    3. Persist the Pending order carrying the provider's session id
    4. Email the buyer a receipt with confirm/cancel links, alert the seller
    5. Hand back the hosted page URL for a 303 redirect

Nothing is persisted unless step 2 succeeds. Email failures never fail a
checkout.
"""

from dataclasses import dataclass

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.checkout.pricing import CURRENCY, cart_total, to_minor_units
from storefront.domain import storefront
from storefront.errors import ConfigurationMissing, ExternalProviderFailure
from storefront.gateway import get_gateway
from storefront.gateway.port import SESSION_ID_PLACEHOLDER, LineItem
from storefront.order.notices import alert_seller, send_buyer_receipt
from storefront.order.order import Order
from storefront.settings.provider import payment_settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CheckoutResult:
    redirect_url: str
    order_id: str | None = None


@storefront.command(part_of="Order")
class Checkout:
    session_key = String(required=True, max_length=255)
    buyer_email = String(required=True, max_length=255)
    base_url = String(required=True, max_length=500)


@storefront.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        base_url = command.base_url.rstrip("/")

        cart = current_domain.repository_for(ShoppingCart).find_by_session(command.session_key)
        if cart is None or cart.is_empty:
            logger.info("Checkout with empty cart", session_key=command.session_key)
            return CheckoutResult(redirect_url=f"{base_url}/cart")

        settings = payment_settings()
        if not settings.has_secret:
            logger.error("Payment provider secret key is not configured")
            raise ConfigurationMissing("Payment provider is not configured")

        lines = cart.ordered_lines
        total = cart_total(lines)

        session = get_gateway(settings.secret_key).create_checkout_session(
            line_items=[
                LineItem(name=line.name, unit_amount=to_minor_units(line.unit_price), quantity=line.quantity)
                for line in lines
            ],
            success_url=f"{base_url}/success?session_id={SESSION_ID_PLACEHOLDER}",
            cancel_url=f"{base_url}/cart",
            currency=CURRENCY.lower(),
            customer_email=command.buyer_email,
        )
        if not session.success:
            logger.error("Hosted checkout session could not be created", reason=session.failure_reason)
            raise ExternalProviderFailure(session.failure_reason or "Payment provider unavailable")

        order = Order.create(
            items_data=[{"product_id": str(line.product_id), "quantity": line.quantity} for line in lines],
            total=total,
            buyer_email=command.buyer_email,
            checkout_session_id=session.session_id,
        )
        current_domain.repository_for(Order).add(order)
        logger.info(
            "Order placed",
            order_id=str(order.id),
            session_id=session.session_id,
            total=str(total),
        )

        # Cart snapshots carry the names the buyer saw, even for since-archived products
        send_buyer_receipt(order, [{"name": line.name, "quantity": line.quantity} for line in lines], base_url)
        alert_seller(order, "placed", names=[line.name for line in lines])

        return CheckoutResult(redirect_url=session.hosted_url, order_id=str(order.id))
