"""Checkout completion — records the order, then empties the cart.

``complete_checkout`` re-reads the cart under the session lock instead of
trusting an earlier ``begin_checkout`` view, so a duplicate form post finds
an empty cart and fails with ``EmptyCartError`` rather than placing a
second order.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.locks import session_locks
from storefront.cart.sessions import session_carts
from storefront.checkout.views import CheckoutConfirmation, begin_checkout
from storefront.domain import storefront
from storefront.errors import EmptyCartError, OrderRecordingFailed
from storefront.order.recording import OrderRecorder

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class CheckOutCart:
    session_id = String(required=True, max_length=255)
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class CheckOutCartHandler:
    @handle(CheckOutCart)
    def check_out_cart(self, command):
        cart = session_carts.get(command.session_id)
        if cart is None:
            raise EmptyCartError(command.session_id)
        cart.check_out(command.order_id)
        session_carts.put(command.session_id, cart)


def complete_checkout(session_id, recorder=None) -> CheckoutConfirmation:
    """Turn the session's cart into an order.

    Args:
        session_id: The shopper's session.
        recorder: Anything with ``record(session_id, line_items, total)``
            returning an order id. Defaults to ``OrderRecorder``.

    Raises:
        EmptyCartError: the cart is missing or empty, including the second
            of two submits.
        OrderRecordingFailed: the recorder raised; the cart is left as it was.
    """
    recorder = recorder or OrderRecorder()

    with session_locks.hold(session_id):
        cart = session_carts.get(session_id)
        if cart is None or cart.is_empty():
            logger.warning("Checkout attempted on an empty cart", session_id=str(session_id))
            raise EmptyCartError(session_id)

        view = begin_checkout(cart)

        try:
            order_id = recorder.record(session_id, view.lines, view.total)
        except Exception as exc:
            logger.error(
                "Order recording failed, cart left untouched",
                session_id=str(session_id),
                error=str(exc),
            )
            raise OrderRecordingFailed(session_id, str(exc)) from exc

        # Recording and clearing commit separately. If clearing fails the order
        # stands, the cart keeps its lines, and the error names the order so it
        # can be reconciled before the shopper retries.
        try:
            current_domain.process(
                CheckOutCart(session_id=str(session_id), order_id=str(order_id)),
                asynchronous=False,
            )
        except Exception:
            logger.error(
                "Order recorded but cart not cleared",
                session_id=str(session_id),
                order_id=str(order_id),
            )
            raise

    logger.info(
        "Checkout complete",
        session_id=str(session_id),
        order_id=str(order_id),
        total=str(view.total),
    )
    return CheckoutConfirmation(order_id=str(order_id), session_id=str(session_id), total=view.total)
