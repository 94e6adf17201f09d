"""Order confirmation template — sent when an order becomes Confirmed."""

from storefront.notifications.kinds import NotificationKind


class OrderConfirmationTemplate:
    kind = NotificationKind.ORDER_CONFIRMATION.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        total = context.get("total", "£0.00")
        return {
            "subject": f"Order #{order_id} Confirmed",
            "body": (
                f"Your order #{order_id} has been confirmed.\n\n"
                f"Order Total: {total}\n\n"
                "Thank you for shopping with us!"
            ),
            "html_body": f"<h3>Order #{order_id} confirmed</h3><p>Total: {total}</p>",
        }
