"""Product aggregate: the catalogue entry a visitor can put in a cart."""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, String, Text

from storefront.catalogue.events import ProductAdded, ProductArchived, ProductUpdated
from storefront.domain import storefront


class ProductStatus(Enum):
    ACTIVE = "Active"
    ARCHIVED = "Archived"


@storefront.aggregate
class Product:
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    image_url: String(max_length=1024)
    status: String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name, price, description=None, image_url=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            description=description,
            image_url=image_url,
            status=ProductStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                price=product.price,
                added_at=now,
            )
        )
        return product

    @property
    def is_available(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value

    def update_details(self, name=None, description=None, price=None, image_url=None):
        """Edit product attributes. Fields left as None keep their value."""
        if not self.is_available:
            raise ValidationError({"status": ["Archived products cannot be edited"]})

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if image_url is not None:
            self.image_url = image_url

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                updated_at=now,
            )
        )

    def archive(self):
        if not self.is_available:
            raise ValidationError({"status": ["Product is already archived"]})

        self.status = ProductStatus.ARCHIVED.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductArchived(
                product_id=self.id,
                archived_at=now,
            )
        )
