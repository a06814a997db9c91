"""Pasarku FastAPI application.

Marketplace web server that processes commands synchronously via HTTP.
Every ``/api`` request runs inside the marketplace domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 3000 --reload
"""

import os

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml.
from fastapi import FastAPI, Request  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from marketplace.domain import marketplace  # noqa: E402
from marketplace.utils.logging import add_context, clear_context  # noqa: E402

marketplace.init()

API_PREFIX = "/api"


def create_app() -> FastAPI:
    app = FastAPI(
        title="Pasarku API",
        description="Marketplace backend: merchants, items, stock, cart, orders and messages",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the marketplace domain context and bind request log context."""
        if not request.url.path.startswith(API_PREFIX):
            # Health check, docs, etc.
            return await call_next(request)

        clear_context()
        add_context(method=request.method, path=request.url.path)
        with marketplace.domain_context():
            response = await call_next(request)
        return response

    # -----------------------------------------------------------------------
    # Error handlers and routers
    # -----------------------------------------------------------------------
    from marketplace.api import (
        account_router,
        cart_router,
        catalog_router,
        message_router,
        order_router,
        owner_router,
    )
    from marketplace.api.errors import register_error_handlers

    register_error_handlers(app)
    for router in (account_router, catalog_router, cart_router, order_router, message_router, owner_router):
        app.include_router(router)

    # -----------------------------------------------------------------------
    # Health / root
    # -----------------------------------------------------------------------
    @app.get("/")
    async def root():
        return {"message": "API is running"}

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": {"name": marketplace.name}})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
