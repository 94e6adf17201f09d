"""Shopping Cart aggregate, one per browser session.

Each line references a product and snapshots its name and price at the moment
it was first added. Lines are unique per product and keep insertion order for
display.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartLineAdded, CartLineRemoved, CartLineUpdated
from storefront.checkout.pricing import cart_total, line_total
from storefront.domain import storefront


@storefront.entity(part_of="ShoppingCart")
class CartLine:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    position = Integer(default=0)

    @property
    def subtotal(self):
        return line_total(self.unit_price, self.quantity)


@storefront.aggregate
class ShoppingCart:
    session_key = String(required=True, max_length=255)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, session_key):
        now = datetime.now(UTC)
        return cls(session_key=session_key, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def ordered_lines(self) -> list[CartLine]:
        return sorted(self.lines or [], key=lambda line: line.position)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total(self):
        return cart_total(self.lines or [])

    def line_for(self, product_id):
        return next((line for line in self.lines or [] if str(line.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_product(self, product_id, name, unit_price, quantity=1):
        """Add a product, or bump the quantity of its existing line.

        The price snapshot of an existing line is kept; the catalogue price at
        first add is what the visitor saw.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.line_for(product_id)
        if existing:
            existing.quantity += quantity
        else:
            next_position = max((line.position for line in self.lines or []), default=-1) + 1
            self.add_lines(
                CartLine(
                    product_id=product_id,
                    name=name,
                    unit_price=unit_price,
                    quantity=quantity,
                    position=next_position,
                )
            )

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                session_key=self.session_key,
                product_id=str(product_id),
                quantity=quantity,
            )
        )

    def update_quantity(self, product_id, new_quantity):
        if new_quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        line = self.line_for(product_id)
        if line is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})

        previous_quantity = line.quantity
        line.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_product(self, product_id):
        line = self.line_for(product_id)
        if line is None:
            raise ValidationError({"product_id": ["Product is not in the cart"]})

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        """Drop every line. Clearing an empty cart raises no event."""
        lines = list(self.lines or [])
        if not lines:
            return

        for line in lines:
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                session_key=self.session_key,
                lines_cleared=len(lines),
            )
        )


@storefront.repository(part_of=ShoppingCart)
class CartRepository:
    def find_by_session(self, session_key: str) -> ShoppingCart | None:
        carts = self._dao.query.filter(session_key=session_key).all().items
        return carts[0] if carts else None
