"""Admin back-office routes, behind HTTP Basic auth with the shared admin credential."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.api.dependencies import require_admin
from storefront.api.schemas import (
    AddProductRequest,
    AdminOrderResponse,
    AdminProductResponse,
    DashboardResponse,
    EmailSettingsRequest,
    EmailSettingsResponse,
    OrderItemResponse,
    OutcomeResponse,
    PaymentSettingsRequest,
    PaymentSettingsResponse,
    ProductIdResponse,
    StatusResponse,
    UpdateProductRequest,
)
from storefront.catalogue.management import AddProduct, ArchiveProduct, UpdateProduct
from storefront.catalogue.queries import list_products, product_names
from storefront.checkout.pricing import PENNY, to_decimal
from storefront.order.cancellation import CancelOrder
from storefront.order.confirmation import ConfirmOrder
from storefront.order.notices import REMOVED_PRODUCT_NAME
from storefront.order.order import LinkOutcome, Order, OrderActor
from storefront.settings.management import UpdateEmailSettings, UpdatePaymentSettings
from storefront.settings.provider import email_settings, payment_settings

admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def mask_secret(value: str | None, visible: int = 4) -> str:
    if not value:
        return ""
    if visible and len(value) > 8:
        return "****" + value[-visible:]
    return "****"


def _payment_settings_response() -> PaymentSettingsResponse:
    settings = payment_settings()
    return PaymentSettingsResponse(
        publishable_key=settings.publishable_key or "",
        secret_key=mask_secret(settings.secret_key),
    )


def _email_settings_response() -> EmailSettingsResponse:
    settings = email_settings()
    return EmailSettingsResponse(
        email_user=settings.email_user or "",
        email_password=mask_secret(settings.email_password, visible=0),
        seller_email=settings.seller_email or "",
        smtp_host=settings.smtp_host,
        smtp_port=settings.smtp_port,
    )


def _order_responses() -> list[AdminOrderResponse]:
    orders = current_domain.repository_for(Order).recent()
    names = product_names(str(item.product_id) for order in orders for item in order.items)

    return [
        AdminOrderResponse(
            order_id=str(order.id),
            status=order.status,
            total=to_decimal(order.total).quantize(PENNY),
            currency=order.currency,
            buyer_email=order.buyer_email,
            checkout_session_id=order.checkout_session_id,
            payment_reference=order.payment_reference,
            refund_reference=order.refund_reference,
            confirmed_by=order.confirmed_by,
            cancelled_by=order.cancelled_by,
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=names.get(str(item.product_id), REMOVED_PRODUCT_NAME),
                    quantity=item.quantity,
                )
                for item in order.items
            ],
            created_at=order.created_at.isoformat() if order.created_at else None,
        )
        for order in orders
    ]


def _admin_outcome(order_id: str, outcome: LinkOutcome):
    if outcome == LinkOutcome.INVALID_LINK:
        return JSONResponse(status_code=409, content={"outcome": outcome.value, "order_id": order_id})
    return OutcomeResponse(outcome=outcome.value, order_id=order_id)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
@admin_router.get("", response_model=DashboardResponse)
async def dashboard() -> DashboardResponse:
    return DashboardResponse(
        orders=_order_responses(),
        products=[
            AdminProductResponse(
                product_id=str(product.id),
                name=product.name,
                description=product.description,
                price=product.price,
                image_url=product.image_url,
                status=product.status,
            )
            for product in list_products(include_archived=True)
        ],
        payment_settings=_payment_settings_response(),
        email_settings=_email_settings_response(),
    )


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@admin_router.post("/products", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        price=body.price,
        description=body.description,
        image_url=body.image_url,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=product_id)


@admin_router.put("/products/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        image_url=body.image_url,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.delete("/products/{product_id}", response_model=StatusResponse)
async def archive_product(product_id: str) -> StatusResponse:
    current_domain.process(ArchiveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------
@admin_router.get("/settings/payment", response_model=PaymentSettingsResponse)
async def read_payment_settings() -> PaymentSettingsResponse:
    return _payment_settings_response()


@admin_router.put("/settings/payment", response_model=PaymentSettingsResponse)
async def update_payment_settings(body: PaymentSettingsRequest) -> PaymentSettingsResponse:
    command = UpdatePaymentSettings(
        publishable_key=body.publishable_key,
        secret_key=body.secret_key,
    )
    current_domain.process(command, asynchronous=False)
    return _payment_settings_response()


@admin_router.get("/settings/email", response_model=EmailSettingsResponse)
async def read_email_settings() -> EmailSettingsResponse:
    return _email_settings_response()


@admin_router.put("/settings/email", response_model=EmailSettingsResponse)
async def update_email_settings(body: EmailSettingsRequest) -> EmailSettingsResponse:
    command = UpdateEmailSettings(
        email_user=body.email_user,
        email_password=body.email_password,
        seller_email=body.seller_email,
        smtp_host=body.smtp_host,
        smtp_port=body.smtp_port,
    )
    current_domain.process(command, asynchronous=False)
    return _email_settings_response()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@admin_router.post("/orders/{order_id}/confirm", response_model=OutcomeResponse)
def admin_confirm_order(order_id: str):
    command = ConfirmOrder(order_id=order_id, confirmed_by=OrderActor.ADMIN.value)
    return _admin_outcome(order_id, current_domain.process(command, asynchronous=False))


@admin_router.post("/orders/{order_id}/cancel", response_model=OutcomeResponse)
def admin_cancel_order(order_id: str):
    command = CancelOrder(order_id=order_id, cancelled_by=OrderActor.ADMIN.value)
    return _admin_outcome(order_id, current_domain.process(command, asynchronous=False))
