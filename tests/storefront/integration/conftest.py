import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from storefront.api import (
    cart_router,
    checkout_router,
    product_router,
    register_exception_handlers,
    session_router,
)


def _build_app():
    from storefront.domain import storefront

    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with storefront.domain_context():
            return await call_next(request)

    register_exception_handlers(app)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(session_router)
    return app


@pytest.fixture()
def client():
    return TestClient(_build_app())


@pytest.fixture()
def other_client():
    """A second browser, with its own session cookie."""
    return TestClient(_build_app())
