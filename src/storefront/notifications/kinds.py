from enum import Enum


class NotificationKind(Enum):
    BUYER_RECEIPT = "BuyerReceipt"
    SELLER_ALERT = "SellerAlert"
    ORDER_CONFIRMATION = "OrderConfirmation"
    ORDER_CANCELLATION = "OrderCancellation"
