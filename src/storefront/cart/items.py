"""Cart line management — commands and handler.

Callers run these through ``process_for_session`` so each read-modify-write
happens under the session's lock.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.sessions import session_carts
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import ProductNotFound

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class AddProductToCart:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class IncrementCartLine:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class DecrementCartLine:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class RemoveProductFromCart:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    session_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=Cart)
class ManageCartLinesHandler:
    @handle(AddProductToCart)
    def add_product_to_cart(self, command):
        product = current_domain.repository_for(Product).find_by_id(command.product_id)
        if product is None:
            logger.warning(
                "Rejected unknown product",
                session_id=command.session_id,
                product_id=str(command.product_id),
            )
            raise ProductNotFound(command.product_id)

        cart = session_carts.get_or_create(command.session_id)
        cart.add_product(product)
        session_carts.put(command.session_id, cart)
        return str(cart.id)

    @handle(IncrementCartLine)
    def increment_cart_line(self, command):
        cart = session_carts.get(command.session_id)
        if cart is None:
            return None
        cart.increment_line(command.product_id)
        session_carts.put(command.session_id, cart)
        return str(cart.id)

    @handle(DecrementCartLine)
    def decrement_cart_line(self, command):
        cart = session_carts.get(command.session_id)
        if cart is None:
            return None
        cart.decrement_line(command.product_id)
        session_carts.put(command.session_id, cart)
        return str(cart.id)

    @handle(RemoveProductFromCart)
    def remove_product_from_cart(self, command):
        cart = session_carts.get(command.session_id)
        if cart is None:
            return None
        cart.remove_product(command.product_id)
        session_carts.put(command.session_id, cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = session_carts.get(command.session_id)
        if cart is None:
            return None
        cart.clear()
        session_carts.put(command.session_id, cart)
        return str(cart.id)
