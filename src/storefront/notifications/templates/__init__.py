"""Template registry — maps NotificationKind to template classes."""

from storefront.notifications.kinds import NotificationKind
from storefront.notifications.templates.buyer_receipt import BuyerReceiptTemplate
from storefront.notifications.templates.order_cancellation import OrderCancellationTemplate
from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notifications.templates.seller_alert import SellerAlertTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationKind.BUYER_RECEIPT.value: BuyerReceiptTemplate,
    NotificationKind.SELLER_ALERT.value: SellerAlertTemplate,
    NotificationKind.ORDER_CONFIRMATION.value: OrderConfirmationTemplate,
    NotificationKind.ORDER_CANCELLATION.value: OrderCancellationTemplate,
}


def get_template(kind: str):
    """Look up a template class by notification kind string."""
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for notification kind: {kind}")
    return template_cls
