"""Shared BDD fixtures and step definitions for the storefront."""

from decimal import Decimal

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then, when
from storefront.cart.items import AddProductToCart, DecrementCartLine, RemoveProductFromCart
from storefront.cart.sessions import process_for_session, session_carts
from storefront.catalogue.product import Product
from storefront.checkout.completion import complete_checkout
from storefront.errors import EmptyCartError
from storefront.order.order import Order


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Catalogue products by their scenario label."""
    return {}


@pytest.fixture()
def error():
    """Container for a captured checkout failure."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an empty cart for session "{sid}"'), target_fixture="session_id")
def empty_cart(sid):
    assert session_carts.get(sid) is None
    return sid


@given(parsers.cfparse('a product "{label}" priced {price:f}'))
def catalogue_product(products, label, price):
    product = Product(name=label, price=price, stock=10)
    current_domain.repository_for(Product).add(product)
    products[label] = product


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{label}" is added to the cart'))
def add_to_cart(session_id, products, label):
    process_for_session(session_id, AddProductToCart(session_id=session_id, product_id=str(products[label].id)))


@when(parsers.cfparse('"{label}" is decremented'))
def decrement(session_id, products, label):
    process_for_session(session_id, DecrementCartLine(session_id=session_id, product_id=str(products[label].id)))


@when(parsers.cfparse('"{label}" is removed from the cart'))
def remove_from_cart(session_id, products, label):
    process_for_session(
        session_id,
        RemoveProductFromCart(session_id=session_id, product_id=str(products[label].id)),
    )


@when("the shopper checks out")
def check_out(session_id, error):
    try:
        complete_checkout(session_id)
    except EmptyCartError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines(session_id, count):
    assert len(session_carts.get(session_id).line_items()) == count


@then(parsers.cfparse('the quantity of "{label}" is {quantity:d}'))
def quantity_of(session_id, products, label, quantity):
    assert session_carts.get(session_id).line_for(products[label].id).quantity == quantity


@then(parsers.cfparse("the cart total is {total}"))
def cart_total(session_id, total):
    assert session_carts.get(session_id).total() == Decimal(total)


@then(parsers.cfparse('the cart lines are "{labels}"'))
def cart_lines(session_id, labels):
    expected = [label.strip() for label in labels.split(",")]
    assert [line.product_name for line in session_carts.get(session_id).line_items()] == expected


@then("the cart is empty")
def cart_is_empty(session_id):
    cart = session_carts.get(session_id)
    assert cart is None or cart.is_empty()


@then(parsers.cfparse("an order was recorded with total {total}"))
def order_recorded_with_total(session_id, total):
    orders = current_domain.repository_for(Order)._dao.query.filter(session_id=session_id).all().items
    assert len(orders) == 1
    assert orders[0].total_amount() == Decimal(total)


@then(parsers.cfparse("{count:d} order was recorded"))
@then(parsers.cfparse("{count:d} orders were recorded"))
def orders_recorded(session_id, count):
    orders = current_domain.repository_for(Order)._dao.query.filter(session_id=session_id).all().items
    assert len(orders) == count


@then("the checkout is refused because the cart is empty")
def checkout_refused(error):
    assert isinstance(error["exc"], EmptyCartError)
