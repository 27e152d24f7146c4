"""Pydantic response/request schemas for the Storefront API.

These are external contracts, kept separate from the Protean commands and
aggregates. Money is rendered as a two-decimal string.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

CENT = Decimal("0.01")


def money(amount) -> str:
    return str(Decimal(str(amount)).quantize(CENT))


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: str
    stock: int

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            product_id=str(product.id),
            name=product.name,
            description=product.description,
            price=money(product.price),
            stock=product.stock or 0,
        )


class ProductListResponse(BaseModel):
    products: list[ProductResponse]


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartLineResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: str
    quantity: int = Field(ge=1)
    line_total: str


class CartResponse(BaseModel):
    session_id: str
    items: list[CartLineResponse]
    item_count: int = 0
    total: str = "0.00"

    @classmethod
    def from_cart(cls, session_id, cart) -> "CartResponse":
        if cart is None:
            return cls(session_id=session_id, items=[])
        return cls(
            session_id=session_id,
            items=[
                CartLineResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    unit_price=money(item.unit_price),
                    quantity=item.quantity,
                    line_total=money(item.line_total()),
                )
                for item in cart.line_items()
            ],
            item_count=cart.item_count(),
            total=money(cart.total()),
        )


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutResponse(BaseModel):
    session_id: str
    state: str
    items: list[CartLineResponse]
    total: str

    @classmethod
    def from_view(cls, view) -> "CheckoutResponse":
        return cls(
            session_id=view.session_id,
            state=view.state.value,
            items=[
                CartLineResponse(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    unit_price=money(line.unit_price),
                    quantity=line.quantity,
                    line_total=money(line.line_total),
                )
                for line in view.lines
            ],
            total=money(view.total),
        )


class CheckoutConfirmationResponse(BaseModel):
    order_id: str
    state: str
    total: str


class OrderLineResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: str
    quantity: int
    line_total: str


class OrderResponse(BaseModel):
    order_id: str
    items: list[OrderLineResponse]
    total: str
    placed_at: str | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            order_id=str(order.id),
            items=[
                OrderLineResponse(
                    product_id=str(line.product_id),
                    product_name=line.product_name,
                    unit_price=money(line.unit_price),
                    quantity=line.quantity,
                    line_total=money(line.line_total()),
                )
                for line in order.ordered_lines()
            ],
            total=money(order.total_amount()),
            placed_at=order.placed_at.isoformat() if order.placed_at else None,
        )


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------
class ExpireIdleSessionsRequest(BaseModel):
    idle_minutes: int | None = Field(default=None, ge=0)


class ExpiredSessionsResponse(BaseModel):
    expired_count: int


class StatusResponse(BaseModel):
    status: str = "ok"
