"""Read helpers over the catalogue used by the store and admin routes."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product, ProductStatus


def list_products(include_archived: bool = False) -> list[Product]:
    repo = current_domain.repository_for(Product)
    if include_archived:
        products = repo._dao.query.all().items
    else:
        products = repo._dao.query.filter(status=ProductStatus.ACTIVE.value).all().items
    return sorted(products, key=lambda p: p.created_at)


def get_available_product(product_id: str) -> Product:
    """Return an active product or raise ObjectNotFoundError."""
    product = current_domain.repository_for(Product).get(product_id)
    if not product.is_available:
        raise ObjectNotFoundError(f"Product {product_id} is no longer available")
    return product


def product_names(product_ids) -> dict[str, str]:
    """Resolve product ids to names; ids that no longer resolve are left out."""
    repo = current_domain.repository_for(Product)
    names = {}
    for product_id in set(product_ids):
        try:
            names[product_id] = repo.get(product_id).name
        except ObjectNotFoundError:
            continue
    return names
