"""Pydantic request/response schemas for the storefront API.

These are external contracts, kept separate from the internal protean commands.
Money leaves the API as decimal strings rounded to the penny.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: float
    image_url: str | None = None


class AdminProductResponse(ProductResponse):
    status: str


class AddProductRequest(BaseModel):
    name: str
    price: float = Field(ge=0)
    description: str | None = None
    image_url: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Nike Air Max",
                    "price": 120.0,
                    "description": "Classic cushioned runner",
                    "image_url": "https://example.com/images/air-max.jpg",
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = None
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    image_url: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartQuantityRequest(BaseModel):
    quantity: int = Field(ge=1)


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal


class CartResponse(BaseModel):
    lines: list[CartLineResponse] = []
    total: Decimal = Decimal("0.00")
    currency: str = "GBP"


# ---------------------------------------------------------------------------
# Checkout and order links
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    email: str = Field(min_length=1)


class OutcomeResponse(BaseModel):
    outcome: str
    order_id: str | None = None


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    quantity: int


class AdminOrderResponse(BaseModel):
    order_id: str
    status: str
    total: Decimal
    currency: str
    buyer_email: str
    checkout_session_id: str
    payment_reference: str | None = None
    refund_reference: str | None = None
    confirmed_by: str | None = None
    cancelled_by: str | None = None
    items: list[OrderItemResponse]
    created_at: str | None = None


class PaymentSettingsRequest(BaseModel):
    publishable_key: str = ""
    secret_key: str = ""


class PaymentSettingsResponse(BaseModel):
    publishable_key: str
    secret_key: str  # masked


class EmailSettingsRequest(BaseModel):
    email_user: str = ""
    email_password: str = ""
    seller_email: str = ""
    smtp_host: str | None = None
    smtp_port: int | None = Field(default=None, ge=1, le=65535)


class EmailSettingsResponse(BaseModel):
    email_user: str
    email_password: str  # masked
    seller_email: str
    smtp_host: str
    smtp_port: int


class DashboardResponse(BaseModel):
    orders: list[AdminOrderResponse]
    products: list[AdminProductResponse]
    payment_settings: PaymentSettingsResponse
    email_settings: EmailSettingsResponse


class StatusResponse(BaseModel):
    status: str = "ok"
