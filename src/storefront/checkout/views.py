"""Checkout views — read-only snapshots of a cart on its way to becoming an order."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from storefront.errors import EmptyCartError


class CheckoutState(Enum):
    EMPTY = "Empty"
    ACTIVE = "Active"
    CHECKED_OUT = "Checked_Out"  # Transient: the cart is emptied right after


@dataclass(frozen=True)
class CheckoutLine:
    product_id: str
    product_name: str
    unit_price: Decimal
    quantity: int
    line_total: Decimal


@dataclass(frozen=True)
class CheckoutView:
    session_id: str
    lines: tuple[CheckoutLine, ...]
    total: Decimal
    state: CheckoutState = CheckoutState.ACTIVE


@dataclass(frozen=True)
class CheckoutConfirmation:
    """Success token handed back once the order is recorded and the cart emptied."""

    order_id: str
    session_id: str
    total: Decimal
    state: CheckoutState = CheckoutState.CHECKED_OUT


def state_of(cart) -> CheckoutState:
    if cart is None or cart.is_empty():
        return CheckoutState.EMPTY
    return CheckoutState.ACTIVE


def begin_checkout(cart) -> CheckoutView:
    """Snapshot the cart for the checkout page.

    Never mutates the cart, so the page can be reloaded freely.

    Raises:
        EmptyCartError: when there is no cart or it has no lines.
    """
    if state_of(cart) is CheckoutState.EMPTY:
        raise EmptyCartError(cart.session_id if cart is not None else None)

    lines = tuple(
        CheckoutLine(
            product_id=str(item.product_id),
            product_name=item.product_name,
            unit_price=Decimal(str(item.unit_price)),
            quantity=item.quantity,
            line_total=item.line_total(),
        )
        for item in cart.line_items()
    )
    return CheckoutView(session_id=cart.session_id, lines=lines, total=cart.total())
