"""Order cancellation template — sent when an order is cancelled."""

from storefront.notifications.kinds import NotificationKind


class OrderCancellationTemplate:
    kind = NotificationKind.ORDER_CANCELLATION.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        cancelled_by = context.get("cancelled_by", "Customer")
        refund_note = context.get("refund_note", "not applicable")
        return {
            "subject": f"Order #{order_id} Cancelled",
            "body": (
                f"Your order #{order_id} has been cancelled.\n\n"
                f"Cancelled by: {cancelled_by}\n"
                f"Refund: {refund_note}\n\n"
                "If you have questions, please reply to this email."
            ),
            "html_body": f"<h3>Order #{order_id} cancelled</h3><p>Refund: {refund_note}</p>",
        }
