import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from marketplace.api import (
    account_router,
    cart_router,
    catalog_router,
    message_router,
    order_router,
    owner_router,
)
from marketplace.api.errors import register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    for router in (account_router, catalog_router, cart_router, order_router, message_router, owner_router):
        app.include_router(router)
    return TestClient(app)
