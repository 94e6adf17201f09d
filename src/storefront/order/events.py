"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A Pending order was created after the provider opened a hosted checkout session."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_email = String(required=True)
    checkout_session_id = String(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    currency = String(default="GBP")
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderConfirmed:
    __version__ = 1

    order_id = Identifier(required=True)
    confirmed_by = String(required=True)
    confirmed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    cancelled_by = String(required=True)
    cancelled_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentCaptured:
    """The provider reported the hosted session as paid."""

    __version__ = 1

    order_id = Identifier(required=True)
    checkout_session_id = String(required=True)
    payment_reference = String(required=True)


@storefront.event(part_of="Order")
class OrderRefunded:
    __version__ = 1

    order_id = Identifier(required=True)
    payment_reference = String(max_length=255)
    refund_reference = String(required=True)
    refunded_at = DateTime(required=True)
