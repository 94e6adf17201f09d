"""Buyer receipt — sent at checkout, before payment completes.

Carries the confirm and cancel links for the order.
"""

from html import escape

from storefront.notifications.kinds import NotificationKind


class BuyerReceiptTemplate:
    kind = NotificationKind.BUYER_RECEIPT.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        total = context.get("total", "£0.00")
        items = context.get("items", [])
        confirm_url = context.get("confirm_url", "")
        cancel_url = context.get("cancel_url", "")

        item_lines = "\n".join(f"  - {item['name']} x {item['quantity']}" for item in items)
        item_html = "".join(f"<li>{escape(item['name'])} &times; {item['quantity']}</li>" for item in items)

        return {
            "subject": "Order Received",
            "body": (
                f"Thank you for your order #{order_id}.\n\n"
                f"{item_lines}\n\n"
                f"Total: {total}\n\n"
                f"Confirm your order: {confirm_url}\n"
                f"Cancel your order: {cancel_url}\n"
            ),
            "html_body": (
                f"<h3>Order #{escape(str(order_id))}</h3>"
                f"<ul>{item_html}</ul>"
                f"<p>Total: {escape(total)}</p>"
                f'<p><a href="{escape(confirm_url)}">Confirm order</a> | '
                f'<a href="{escape(cancel_url)}">Cancel order</a></p>'
            ),
        }
