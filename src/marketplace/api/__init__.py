"""Marketplace API package."""

from marketplace.api.routes import (
    account_router,
    cart_router,
    catalog_router,
    message_router,
    order_router,
    owner_router,
)

__all__ = [
    "account_router",
    "catalog_router",
    "cart_router",
    "order_router",
    "message_router",
    "owner_router",
]
