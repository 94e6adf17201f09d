"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="ShoppingCart")
class CartLineAdded:
    """A product was put in the cart, or its quantity increased by a repeat add."""

    __version__ = 1

    cart_id = Identifier(required=True)
    session_key = String(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartLineUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartLineRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were dropped, after a confirmed payment or at the visitor's request."""

    __version__ = 1

    cart_id = Identifier(required=True)
    session_key = String(required=True)
    lines_cleared = Integer(required=True)
