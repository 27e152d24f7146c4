"""Application tests for the session store and its expiry rules."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError
from storefront.cart.cart import Cart
from storefront.cart.items import AddProductToCart
from storefront.cart.locks import session_locks
from storefront.cart.sessions import process_for_session, session_carts


def _add(session_id, product):
    process_for_session(session_id, AddProductToCart(session_id=session_id, product_id=str(product.id)))


class TestGetAndPut:
    def test_get_unknown_session_returns_none(self):
        assert session_carts.get("sess-unknown") is None

    def test_get_or_create_does_not_store(self):
        cart = session_carts.get_or_create("sess-new")
        assert cart.is_empty()
        assert session_carts.get("sess-new") is None

    def test_put_then_get(self):
        cart = session_carts.get_or_create("sess-new")
        session_carts.put("sess-new", cart)
        assert str(session_carts.get("sess-new").id) == str(cart.id)

    def test_put_under_another_session_is_rejected(self):
        cart = Cart.create(session_id="sess-a")
        with pytest.raises(ValidationError):
            session_carts.put("sess-b", cart)


class TestExpire:
    def test_expire_destroys_the_cart(self, t_shirt):
        _add("sess-exp", t_shirt)
        assert session_carts.expire("sess-exp") is True
        assert session_carts.get("sess-exp") is None

    def test_expire_forgets_the_lock(self, t_shirt):
        _add("sess-exp", t_shirt)
        assert "sess-exp" in session_locks
        session_carts.expire("sess-exp")
        assert "sess-exp" not in session_locks

    def test_expire_without_cart(self):
        assert session_carts.expire("sess-none") is False

    def test_new_cart_after_expiry_starts_empty(self, t_shirt, jeans):
        _add("sess-exp", t_shirt)
        session_carts.expire("sess-exp")
        _add("sess-exp", jeans)
        assert [line.product_name for line in session_carts.get("sess-exp").line_items()] == ["Blue Jeans"]


class TestExpireIdle:
    def test_only_idle_carts_expire(self, t_shirt):
        _add("sess-old", t_shirt)
        _add("sess-fresh", t_shirt)

        old = session_carts.get("sess-old")
        old.updated_at = datetime.now(UTC) - timedelta(hours=2)
        session_carts.put("sess-old", old)

        assert session_carts.expire_idle(idle_minutes=30) == 1
        assert session_carts.get("sess-old") is None
        assert session_carts.get("sess-fresh") is not None

    def test_as_of_moves_the_cutoff(self, t_shirt):
        _add("sess-a", t_shirt)
        later = datetime.now(UTC) + timedelta(hours=1)
        assert session_carts.expire_idle(idle_minutes=30, as_of=later) == 1

    def test_nothing_to_expire(self):
        assert session_carts.expire_idle(idle_minutes=30) == 0
