"""Tests for adding, incrementing, decrementing and removing cart lines."""

import pytest
from storefront.cart.cart import Cart


def _make_cart():
    return Cart.create(session_id="sess-001")


class TestAddProduct:
    def test_first_add_creates_line_with_quantity_one(self, t_shirt):
        cart = _make_cart()
        cart.add_product(t_shirt)
        line = cart.line_for(t_shirt.id)
        assert line.quantity == 1
        assert line.product_name == "Red T-Shirt"
        assert line.unit_price == 19.99

    @pytest.mark.parametrize("times", [1, 2, 5])
    def test_quantity_equals_number_of_adds(self, t_shirt, times):
        cart = _make_cart()
        for _ in range(times):
            cart.add_product(t_shirt)
        assert len(cart.line_items()) == 1
        assert cart.line_for(t_shirt.id).quantity == times

    def test_distinct_products_keep_insertion_order(self, t_shirt, jeans, sneakers):
        cart = _make_cart()
        cart.add_product(jeans)
        cart.add_product(t_shirt)
        cart.add_product(sneakers)
        cart.add_product(jeans)

        ordered = [line.product_name for line in cart.line_items()]
        assert ordered == ["Blue Jeans", "Red T-Shirt", "Sneakers"]

    def test_re_adding_after_removal_goes_to_the_end(self, t_shirt, jeans):
        cart = _make_cart()
        cart.add_product(t_shirt)
        cart.add_product(jeans)
        cart.remove_product(t_shirt.id)
        cart.add_product(t_shirt)

        ordered = [line.product_name for line in cart.line_items()]
        assert ordered == ["Blue Jeans", "Red T-Shirt"]

    def test_line_items_are_live(self, t_shirt):
        cart = _make_cart()
        cart.add_product(t_shirt)
        line = cart.line_items()[0]

        cart.add_product(t_shirt)
        assert line.quantity == 2


class TestIncrementLine:
    def test_increment_existing_line(self, t_shirt):
        cart = _make_cart()
        cart.add_product(t_shirt)
        cart.increment_line(t_shirt.id)
        assert cart.line_for(t_shirt.id).quantity == 2

    def test_increment_absent_product_is_noop(self, t_shirt, jeans):
        cart = _make_cart()
        cart.add_product(t_shirt)
        cart.increment_line(jeans.id)
        assert cart.line_for(jeans.id) is None
        assert len(cart.line_items()) == 1


class TestDecrementLine:
    def test_decrement_reduces_quantity(self, t_shirt):
        cart = _make_cart()
        cart.add_product(t_shirt)
        cart.add_product(t_shirt)
        cart.decrement_line(t_shirt.id)
        assert cart.line_for(t_shirt.id).quantity == 1

    def test_decrement_floors_at_one(self, t_shirt):
        cart = _make_cart()
        cart.add_product(t_shirt)
        for _ in range(3):
            cart.decrement_line(t_shirt.id)
        assert cart.line_for(t_shirt.id).quantity == 1

    def test_decrement_never_removes_the_line(self, t_shirt):
        cart = _make_cart()
        cart.add_product(t_shirt)
        cart.decrement_line(t_shirt.id)
        assert not cart.is_empty()

    def test_decrement_absent_product_is_noop(self, t_shirt):
        cart = _make_cart()
        cart.decrement_line(t_shirt.id)
        assert cart.is_empty()


class TestRemoveProduct:
    def test_remove_deletes_line(self, t_shirt, jeans):
        cart = _make_cart()
        cart.add_product(t_shirt)
        cart.add_product(jeans)
        cart.remove_product(t_shirt.id)
        assert [line.product_name for line in cart.line_items()] == ["Blue Jeans"]

    def test_remove_whole_line_regardless_of_quantity(self, t_shirt):
        cart = _make_cart()
        for _ in range(4):
            cart.add_product(t_shirt)
        cart.remove_product(t_shirt.id)
        assert cart.is_empty()

    def test_remove_is_idempotent(self, t_shirt):
        cart = _make_cart()
        cart.add_product(t_shirt)
        cart.remove_product(t_shirt.id)
        cart.remove_product(t_shirt.id)
        cart.remove_product(t_shirt.id)
        assert cart.is_empty()

    def test_remove_from_empty_cart_is_noop(self, t_shirt):
        cart = _make_cart()
        cart.remove_product(t_shirt.id)
        assert cart.is_empty()


class TestClear:
    def test_clear_empties_the_cart(self, t_shirt, jeans):
        cart = _make_cart()
        cart.add_product(t_shirt)
        cart.add_product(jeans)
        cart.clear()
        assert cart.is_empty()

    def test_cart_is_reusable_after_clear(self, t_shirt, jeans):
        cart = _make_cart()
        cart.add_product(t_shirt)
        cart.clear()
        cart.add_product(jeans)
        assert [line.product_name for line in cart.line_items()] == ["Blue Jeans"]
        assert cart.line_for(jeans.id).quantity == 1

    def test_clear_on_empty_cart(self):
        cart = _make_cart()
        cart.clear()
        assert cart.is_empty()
