"""FastAPI routes for the Storefront — catalogue, cart, checkout and sessions.

Each route is a thin adapter: resolve the session, dispatch to the cart or
checkout, and render the result. Failures surface as ``StorefrontError``
subclasses and are turned into responses by ``storefront.api.errors``.
"""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    CartResponse,
    CheckoutConfirmationResponse,
    CheckoutResponse,
    ExpiredSessionsResponse,
    ExpireIdleSessionsRequest,
    OrderResponse,
    ProductListResponse,
    ProductResponse,
    StatusResponse,
    money,
)
from storefront.api.sessions import shopper_session
from storefront.cart.items import (
    AddProductToCart,
    ClearCart,
    DecrementCartLine,
    IncrementCartLine,
    RemoveProductFromCart,
)
from storefront.cart.sessions import process_for_session, session_carts
from storefront.catalogue.product import Product
from storefront.checkout.completion import complete_checkout
from storefront.checkout.views import begin_checkout
from storefront.errors import ProductNotFound
from storefront.order.order import Order
from storefront.utils import settings

# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductListResponse)
async def list_products() -> ProductListResponse:
    products = current_domain.repository_for(Product).list_all()
    return ProductListResponse(products=[ProductResponse.from_product(p) for p in products])


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).find_by_id(product_id)
    if product is None:
        raise ProductNotFound(product_id)
    return ProductResponse.from_product(product)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_response(session_id: str) -> CartResponse:
    return CartResponse.from_cart(session_id, session_carts.get(session_id))


@cart_router.get("", response_model=CartResponse)
async def view_cart(session_id: str = Depends(shopper_session)) -> CartResponse:
    return _cart_response(session_id)


@cart_router.post("/items/{product_id}", response_model=CartResponse)
async def add_to_cart(product_id: str, session_id: str = Depends(shopper_session)) -> CartResponse:
    process_for_session(session_id, AddProductToCart(session_id=session_id, product_id=product_id))
    return _cart_response(session_id)


@cart_router.post("/items/{product_id}/increment", response_model=CartResponse)
async def increment_line(product_id: str, session_id: str = Depends(shopper_session)) -> CartResponse:
    process_for_session(session_id, IncrementCartLine(session_id=session_id, product_id=product_id))
    return _cart_response(session_id)


@cart_router.post("/items/{product_id}/decrement", response_model=CartResponse)
async def decrement_line(product_id: str, session_id: str = Depends(shopper_session)) -> CartResponse:
    process_for_session(session_id, DecrementCartLine(session_id=session_id, product_id=product_id))
    return _cart_response(session_id)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(product_id: str, session_id: str = Depends(shopper_session)) -> CartResponse:
    process_for_session(session_id, RemoveProductFromCart(session_id=session_id, product_id=product_id))
    return _cart_response(session_id)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(session_id: str = Depends(shopper_session)) -> CartResponse:
    process_for_session(session_id, ClearCart(session_id=session_id))
    return _cart_response(session_id)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.get("", response_model=CheckoutResponse)
async def view_checkout(session_id: str = Depends(shopper_session)) -> CheckoutResponse:
    view = begin_checkout(session_carts.get(session_id))
    return CheckoutResponse.from_view(view)


@checkout_router.post("", status_code=201, response_model=CheckoutConfirmationResponse)
async def submit_checkout(session_id: str = Depends(shopper_session)) -> CheckoutConfirmationResponse:
    confirmation = complete_checkout(session_id)
    return CheckoutConfirmationResponse(
        order_id=confirmation.order_id,
        state=confirmation.state.value,
        total=money(confirmation.total),
    )


@checkout_router.get("/success/{order_id}", response_model=OrderResponse)
async def checkout_success(order_id: str, session_id: str = Depends(shopper_session)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    # Another session's order is reported exactly like a missing one
    if order.session_id != session_id:
        raise ObjectNotFoundError(f"Order {order_id} does not exist")
    return OrderResponse.from_order(order)


# ---------------------------------------------------------------------------
# Session Router
# ---------------------------------------------------------------------------
session_router = APIRouter(tags=["sessions"])


@session_router.delete("/session", response_model=StatusResponse)
async def end_session(session_id: str = Depends(shopper_session)) -> StatusResponse:
    session_carts.expire(session_id)
    return StatusResponse()


@session_router.post("/maintenance/expire-idle-sessions", response_model=ExpiredSessionsResponse)
async def expire_idle_sessions(body: ExpireIdleSessionsRequest) -> ExpiredSessionsResponse:
    """Sweep carts idle beyond the threshold. Meant for an external scheduler."""
    idle_minutes = body.idle_minutes if body.idle_minutes is not None else settings.SESSION_IDLE_MINUTES
    return ExpiredSessionsResponse(expired_count=session_carts.expire_idle(idle_minutes))
