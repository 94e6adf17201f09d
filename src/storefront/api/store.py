"""Public storefront routes: catalogue browsing, cart, checkout and the payment return."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, RedirectResponse
from protean.utils.globals import current_domain

from storefront.api.dependencies import base_url, cart_session
from storefront.api.schemas import (
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    OutcomeResponse,
    ProductResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
)
from storefront.cart.cart import ShoppingCart
from storefront.cart.management import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from storefront.catalogue.queries import get_available_product, list_products
from storefront.checkout.checkout import Checkout
from storefront.checkout.pricing import to_decimal
from storefront.order.order import LinkOutcome
from storefront.order.reconciliation import ReconcilePayment

store_router = APIRouter(tags=["store"])


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        image_url=product.image_url,
    )


def _cart_response(session_key: str) -> CartResponse:
    cart = current_domain.repository_for(ShoppingCart).find_by_session(session_key)
    if cart is None:
        return CartResponse()

    return CartResponse(
        lines=[
            CartLineResponse(
                product_id=str(line.product_id),
                name=line.name,
                unit_price=to_decimal(line.unit_price),
                quantity=line.quantity,
                subtotal=line.subtotal,
            )
            for line in cart.ordered_lines
        ],
        total=cart.total,
    )


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@store_router.get("/products", response_model=list[ProductResponse])
async def browse_products() -> list[ProductResponse]:
    return [_product_response(product) for product in list_products()]


@store_router.get("/products/{product_id}", response_model=ProductResponse)
async def product_detail(product_id: str) -> ProductResponse:
    return _product_response(get_available_product(product_id))


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@store_router.get("/cart", response_model=CartResponse)
async def view_cart(session_key: str = Depends(cart_session)) -> CartResponse:
    return _cart_response(session_key)


@store_router.post("/cart/items", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, session_key: str = Depends(cart_session)) -> CartResponse:
    command = AddToCart(
        session_key=session_key,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(session_key)


@store_router.put("/cart/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str, body: UpdateCartQuantityRequest, session_key: str = Depends(cart_session)
) -> CartResponse:
    command = UpdateCartQuantity(
        session_key=session_key,
        product_id=product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(session_key)


@store_router.delete("/cart/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, session_key: str = Depends(cart_session)) -> CartResponse:
    current_domain.process(RemoveFromCart(session_key=session_key, product_id=product_id), asynchronous=False)
    return _cart_response(session_key)


@store_router.delete("/cart", response_model=StatusResponse)
async def clear_cart(session_key: str = Depends(cart_session)) -> StatusResponse:
    current_domain.process(ClearCart(session_key=session_key), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
# Sync handlers: they wait on the payment provider and SMTP, so they run in
# the threadpool rather than on the event loop.
@store_router.post("/checkout")
def checkout(
    body: CheckoutRequest,
    session_key: str = Depends(cart_session),
    root_url: str = Depends(base_url),
):
    """Start payment and send the browser to the provider's hosted page.

    An empty cart redirects back to the cart instead.
    """
    command = Checkout(
        session_key=session_key,
        buyer_email=body.email,
        base_url=root_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return RedirectResponse(url=result.redirect_url, status_code=303)


@store_router.get("/success", response_model=OutcomeResponse)
def payment_success(
    session_id: str = Query(..., min_length=1),
    session_key: str = Depends(cart_session),
):
    outcome = current_domain.process(ReconcilePayment(checkout_session_id=session_id), asynchronous=False)

    if outcome in (LinkOutcome.CONFIRMED, LinkOutcome.ALREADY_CONFIRMED):
        current_domain.process(ClearCart(session_key=session_key), asynchronous=False)
    if outcome == LinkOutcome.INVALID_LINK:
        return JSONResponse(status_code=404, content={"outcome": outcome.value})

    return OutcomeResponse(outcome=outcome.value)
