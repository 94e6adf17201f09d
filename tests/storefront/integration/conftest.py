import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from storefront.api import admin_router, order_link_router, store_router
from storefront.api.errors import register_error_handlers

ADMIN_AUTH = ("admin", "password")


@pytest.fixture()
def storefront_app():
    app = FastAPI()
    app.include_router(store_router)
    app.include_router(order_link_router)
    app.include_router(admin_router)
    app.add_middleware(SessionMiddleware, secret_key="test-session-secret")
    register_error_handlers(app)
    return app


@pytest.fixture()
def client(storefront_app):
    return TestClient(storefront_app)


@pytest.fixture()
def admin_auth():
    return ADMIN_AUTH


@pytest.fixture()
def product_ids(client, admin_auth):
    """Two catalogue products added through the admin API."""
    ids = []
    for name, price in [("Nike Air Max", 120.0), ("Reebok Classic", 80.0)]:
        response = client.post("/admin/products", json={"name": name, "price": price}, auth=admin_auth)
        assert response.status_code == 201
        ids.append(response.json()["product_id"])
    return ids
