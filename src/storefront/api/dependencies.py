"""Request dependencies shared by the storefront routers."""

import os
import secrets
from uuid import uuid4

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

CART_SESSION_KEY = "cart_session"

_basic = HTTPBasic(realm="Storefront admin")


def cart_session(request: Request) -> str:
    """The visitor's cart key, minted into the signed session cookie on first use."""
    key = request.session.get(CART_SESSION_KEY)
    if not key:
        key = uuid4().hex
        request.session[CART_SESSION_KEY] = key
    return key


def base_url(request: Request) -> str:
    return str(request.base_url).rstrip("/")


def require_admin(credentials: HTTPBasicCredentials = Depends(_basic)) -> str:
    expected_username = os.getenv("ADMIN_USERNAME", "admin")
    expected_password = os.getenv("ADMIN_PASSWORD", "password")

    username_ok = secrets.compare_digest(credentials.username.encode(), expected_username.encode())
    password_ok = secrets.compare_digest(credentials.password.encode(), expected_password.encode())
    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=401,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
