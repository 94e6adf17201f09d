"""Seller alert — internal notice to the shop owner about order activity."""

from html import escape

from storefront.notifications.kinds import NotificationKind

_HEADLINES = {
    "placed": "New order",
    "confirmed": "Customer confirmed order",
    "cancelled": "Customer cancelled order",
}

# Used when the shop itself, not the buyer, moved the order
_ACTOR_HEADLINES = {
    "confirmed": "Order confirmed by {actor}",
    "cancelled": "Order cancelled by {actor}",
}


def _headline(event: str, actor: str | None) -> str:
    if actor and actor != "Customer" and event in _ACTOR_HEADLINES:
        return _ACTOR_HEADLINES[event].format(actor=actor.lower())
    return _HEADLINES.get(event, "Order update")


class SellerAlertTemplate:
    kind = NotificationKind.SELLER_ALERT.value

    @staticmethod
    def render(context: dict) -> dict:
        event = context.get("event", "placed")
        headline = _headline(event, context.get("actor"))
        order_id = context.get("order_id", "N/A")

        details = [f"Order: #{order_id}"]
        if "total" in context:
            details.append(f"Total: {context['total']}")
        if "buyer_email" in context:
            details.append(f"Buyer: {context['buyer_email']}")
        if context.get("item_names"):
            details.append(f"Items: {', '.join(context['item_names'])}")
        if "session_id" in context:
            details.append(f"Payment session: {context['session_id']}")
        if event == "cancelled":
            details.append(f"Refund: {context.get('refund_note', 'not applicable')}")

        return {
            "subject": f"{headline} #{order_id}",
            "body": f"{headline}.\n\n" + "\n".join(details) + "\n",
            "html_body": f"<h3>{escape(headline)}</h3>" + "".join(f"<p>{escape(line)}</p>" for line in details),
        }
