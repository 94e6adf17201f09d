from storefront.api.admin import admin_router
from storefront.api.orders import order_link_router
from storefront.api.store import store_router

__all__ = ["admin_router", "order_link_router", "store_router"]
