"""Catalogue management — admin commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    image_url: String(max_length=1024)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    image_url: String(max_length=1024)


@storefront.command(part_of="Product")
class ArchiveProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageCatalogueHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            description=command.description,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            image_url=command.image_url,
        )
        repo.add(product)

    @handle(ArchiveProduct)
    def archive_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.archive()
        repo.add(product)
