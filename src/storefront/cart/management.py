"""Cart commands and handler.

Carts are created lazily by the first AddToCart of a session. The product's
name and price are snapshotted from the catalogue at that point.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.queries import get_available_product
from storefront.domain import storefront


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    session_key = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    session_key = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    session_key = String(required=True, max_length=255)
    product_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    session_key = String(required=True, max_length=255)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = get_available_product(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_by_session(command.session_key) or ShoppingCart.create(command.session_key)
        cart.add_product(
            product_id=str(product.id),
            name=product.name,
            unit_price=product.price,
            quantity=command.quantity or 1,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartQuantity)
    def update_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _existing_cart(repo, command.session_key)
        cart.update_quantity(command.product_id, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _existing_cart(repo, command.session_key)
        cart.remove_product(command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_by_session(command.session_key)
        if cart is None:
            return
        cart.clear()
        repo.add(cart)


def _existing_cart(repo, session_key):
    cart = repo.find_by_session(session_key)
    if cart is None:
        raise ValidationError({"cart": ["Cart is empty"]})
    return cart
