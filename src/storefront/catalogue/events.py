"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """Name, description, price or image of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    updated_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductArchived:
    """A product was withdrawn from sale. Existing carts and orders keep referring to it."""

    __version__ = 1

    product_id: Identifier(required=True)
    archived_at: DateTime(required=True)
