"""Order notification helpers shared by checkout and the lifecycle handlers.

All of these are fire-and-forget: the notifier logs and swallows failures.
"""

from storefront.catalogue.queries import product_names
from storefront.checkout.pricing import format_amount
from storefront.notifications import get_notifier
from storefront.notifications.kinds import NotificationKind

REMOVED_PRODUCT_NAME = "(removed product)"


def item_names(order) -> list[str]:
    names = product_names(str(item.product_id) for item in order.items)
    return [names.get(str(item.product_id), REMOVED_PRODUCT_NAME) for item in order.items]


def refund_note(order) -> str:
    if order.refund_reference:
        return f"issued ({order.refund_reference})"
    if order.payment_reference:
        return "failed, manual reconciliation required"
    return "not applicable"


def send_buyer_receipt(order, items, base_url: str) -> bool:
    return get_notifier().send(
        NotificationKind.BUYER_RECEIPT,
        [order.buyer_email],
        {
            "order_id": str(order.id),
            "total": format_amount(order.total),
            "items": items,
            "confirm_url": f"{base_url}/orders/{order.id}/confirm",
            "cancel_url": f"{base_url}/orders/{order.id}/cancel",
        },
    )


def send_buyer_confirmation(order) -> bool:
    return get_notifier().send(
        NotificationKind.ORDER_CONFIRMATION,
        [order.buyer_email],
        {"order_id": str(order.id), "total": format_amount(order.total)},
    )


def send_buyer_cancellation(order) -> bool:
    return get_notifier().send(
        NotificationKind.ORDER_CANCELLATION,
        [order.buyer_email],
        {
            "order_id": str(order.id),
            "cancelled_by": order.cancelled_by,
            "refund_note": refund_note(order),
        },
    )


def alert_seller(order, event: str, names: list[str] | None = None) -> bool:
    context = {
        "event": event,
        "order_id": str(order.id),
        "total": format_amount(order.total),
        "buyer_email": order.buyer_email,
    }
    if event == "placed":
        context["item_names"] = names if names is not None else item_names(order)
        context["session_id"] = order.checkout_session_id
    if event == "confirmed":
        context["actor"] = order.confirmed_by
    if event == "cancelled":
        context["actor"] = order.cancelled_by
        context["refund_note"] = refund_note(order)
    return get_notifier().notify_seller(context)
