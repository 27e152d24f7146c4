"""Storefront FastAPI application.

Serves the product catalogue, the session cart and checkout over HTTP.
Every request runs inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay; the default in-memory providers
# hold the catalogue, carts and orders for the life of the process.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.domain import logger, storefront
from storefront.utils import settings
from storefront.utils.logging import clear_context

storefront.init()

if settings.SEED_CATALOGUE:
    from storefront.catalogue.seeding import SeedCatalogue

    with storefront.domain_context():
        storefront.process(SeedCatalogue(requested_by="startup"), asynchronous=False)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Product catalogue, session cart and checkout",
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
    """Push the storefront domain context for each request."""
    clear_context()
    with storefront.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api import (  # noqa: E402
    cart_router,
    checkout_router,
    product_router,
    register_exception_handlers,
    session_router,
)

register_exception_handlers(app)
app.include_router(product_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(session_router)

logger.info("Storefront API ready", env=settings.ENV)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": {"name": storefront.name},
        }
    )
