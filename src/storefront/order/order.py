"""Order aggregate — the order lifecycle state machine.

State Machine:
    PENDING → CONFIRMED   (customer link, provider reconciliation, admin)
    PENDING → CANCELLED   (customer link, admin)

Confirmed and Cancelled are terminal. Cancelling an already Cancelled order is
accepted without a state change so the compensating refund can be retried.

Orders are created only by checkout, after the payment provider has opened a
hosted session. The total is computed once at that point and never changes.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.checkout.pricing import CURRENCY
from storefront.domain import storefront
from storefront.order.events import (
    OrderCancelled,
    OrderConfirmed,
    OrderPlaced,
    OrderRefunded,
    PaymentCaptured,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


class OrderActor(Enum):
    CUSTOMER = "Customer"
    PROVIDER = "Provider"
    ADMIN = "Admin"


class LinkOutcome(Enum):
    """What a confirm, cancel or reconcile request did, for the caller to render."""

    CONFIRMED = "confirmed"
    ALREADY_CONFIRMED = "already_confirmed"
    PAYMENT_PENDING = "payment_pending"
    CANCELLED = "cancelled"
    INVALID_LINK = "invalid_link"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A product reference and quantity. Names are resolved from the catalogue at display time."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default=CURRENCY)
    buyer_email = String(required=True, max_length=255)
    checkout_session_id = String(required=True, max_length=255)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_reference = String(max_length=255)
    refund_reference = String(max_length=255)
    confirmed_by = String(choices=OrderActor)
    cancelled_by = String(choices=OrderActor)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, items_data, total, buyer_email, checkout_session_id):
        """Place a Pending order.

        Args:
            items_data: List of dicts with product_id and quantity.
            total: Order total in GBP, already rounded to the penny.
            buyer_email: Where receipts and confirmations go.
            checkout_session_id: The provider's hosted session reference.
        """
        now = datetime.now(UTC)
        order = cls(
            items=[OrderItem(product_id=item["product_id"], quantity=item["quantity"]) for item in items_data],
            total=float(total),
            buyer_email=buyer_email,
            checkout_session_id=checkout_session_id,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_email=buyer_email,
                checkout_session_id=checkout_session_id,
                item_count=len(items_data),
                total=float(total),
                currency=order.currency,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State queries
    # -------------------------------------------------------------------
    @property
    def current_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    @property
    def is_pending(self) -> bool:
        return self.current_status == OrderStatus.PENDING

    @property
    def is_confirmed(self) -> bool:
        return self.current_status == OrderStatus.CONFIRMED

    @property
    def is_cancelled(self) -> bool:
        return self.current_status == OrderStatus.CANCELLED

    @property
    def is_refunded(self) -> bool:
        return bool(self.refund_reference)

    def can_transition_to(self, target_status: OrderStatus) -> bool:
        return target_status in _VALID_TRANSITIONS[self.current_status]

    def _assert_can_transition(self, target_status):
        if not self.can_transition_to(target_status):
            raise ValidationError(
                {"status": [f"Cannot transition from {self.current_status.value} to {target_status.value}"]}
            )

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def confirm(self, confirmed_by: OrderActor):
        self._assert_can_transition(OrderStatus.CONFIRMED)

        now = datetime.now(UTC)
        self.status = OrderStatus.CONFIRMED.value
        self.confirmed_by = confirmed_by.value
        self.updated_at = now

        self.raise_(
            OrderConfirmed(
                order_id=str(self.id),
                confirmed_by=confirmed_by.value,
                confirmed_at=now,
            )
        )

    def cancel(self, cancelled_by: OrderActor) -> bool:
        """Cancel a Pending order.

        Returns False when the order was already Cancelled, leaving it untouched.
        Cancelling a Confirmed order is rejected.
        """
        if self.is_cancelled:
            return False
        self._assert_can_transition(OrderStatus.CANCELLED)

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_by = cancelled_by.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                cancelled_by=cancelled_by.value,
                cancelled_at=now,
            )
        )
        return True

    def record_payment(self, payment_reference: str):
        if self.payment_reference == payment_reference:
            return

        self.payment_reference = payment_reference
        self.updated_at = datetime.now(UTC)

        self.raise_(
            PaymentCaptured(
                order_id=str(self.id),
                checkout_session_id=self.checkout_session_id,
                payment_reference=payment_reference,
            )
        )

    def record_refund(self, refund_reference: str):
        if not self.is_cancelled:
            raise ValidationError({"status": ["Only cancelled orders can be refunded"]})
        if self.is_refunded:
            raise ValidationError({"refund_reference": ["Order has already been refunded"]})

        now = datetime.now(UTC)
        self.refund_reference = refund_reference
        self.updated_at = now

        self.raise_(
            OrderRefunded(
                order_id=str(self.id),
                payment_reference=self.payment_reference,
                refund_reference=refund_reference,
                refunded_at=now,
            )
        )


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_checkout_session(self, checkout_session_id: str) -> Order | None:
        orders = self._dao.query.filter(checkout_session_id=checkout_session_id).all().items
        return orders[0] if orders else None

    def recent(self) -> list[Order]:
        orders = self._dao.query.all().items
        return sorted(orders, key=lambda order: order.created_at, reverse=True)
