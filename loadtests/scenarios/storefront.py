"""Storefront load test scenarios.

Three user types:

- BrowserUser reads the catalogue and never buys.
- ShopperUser walks the whole cart journey and checks out.
- DoubleSubmitUser fires checkout twice in a row, the way an impatient
  shopper double-clicks; the second submit must be rejected with 409.

The HTTP client keeps the ``session_id`` cookie between requests, so each
simulated user owns exactly one cart.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


def _load_product_ids(client) -> list[str]:
    with client.get("/products", catch_response=True, name="GET /products") as resp:
        if resp.status_code != 200:
            resp.failure(f"List products failed: {resp.status_code} — {extract_error_detail(resp)}")
            return []
        return [p["product_id"] for p in resp.json()["products"]]


class BrowserUser(HttpUser):
    """Window shopper: lists products and opens a few of them."""

    wait_time = between(0.5, 2.0)
    weight = 3

    def on_start(self):
        self.product_ids = _load_product_ids(self.client)

    @task(3)
    def list_products(self):
        self.product_ids = _load_product_ids(self.client) or self.product_ids

    @task(5)
    def view_product(self):
        if not self.product_ids:
            return
        product_id = random.choice(self.product_ids)
        with self.client.get(
            f"/products/{product_id}",
            catch_response=True,
            name="GET /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View product failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task(1)
    def view_unknown_product(self):
        with self.client.get(
            "/products/does-not-exist",
            catch_response=True,
            name="GET /products/{id} (unknown)",
        ) as resp:
            if resp.status_code == 404:
                resp.success()
            else:
                resp.failure(f"Expected 404 for unknown product, got {resp.status_code}")


class CartToCheckoutJourney(SequentialTaskSet):
    """List -> Add x3 -> Increment -> Decrement -> Remove -> View checkout -> Submit.

    Ends by confirming the success page for the order just placed.
    """

    def on_start(self):
        self.state = ShopperState(product_ids=_load_product_ids(self.client))
        if not self.state.product_ids:
            self.interrupt()

    def _add(self, product_id: str) -> None:
        with self.client.post(
            f"/cart/items/{product_id}",
            catch_response=True,
            name="POST /cart/items/{id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.added(product_id)
            else:
                resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def add_items(self):
        for product_id in random.choices(self.state.product_ids, k=3):
            self._add(product_id)

    @task
    def increment_line(self):
        if self.state.cart_is_empty:
            return
        product_id = next(iter(self.state.cart_lines))
        with self.client.post(
            f"/cart/items/{product_id}/increment",
            catch_response=True,
            name="POST /cart/items/{id}/increment",
        ) as resp:
            if resp.status_code == 200:
                self.state.added(product_id)
            else:
                resp.failure(f"Increment failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def decrement_line(self):
        if self.state.cart_is_empty:
            return
        product_id = next(iter(self.state.cart_lines))
        with self.client.post(
            f"/cart/items/{product_id}/decrement",
            catch_response=True,
            name="POST /cart/items/{id}/decrement",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Decrement failed: {resp.status_code} — {extract_error_detail(resp)}")
                return
            quantities = {line["product_id"]: line["quantity"] for line in resp.json()["items"]}
            if quantities.get(product_id, 0) < 1:
                resp.failure(f"Decrement dropped line {product_id} below 1")
            self.state.cart_lines[product_id] = quantities.get(product_id, 1)

    @task
    def remove_one_line(self):
        if len(self.state.cart_lines) < 2:
            return
        product_id = list(self.state.cart_lines)[-1]
        with self.client.delete(
            f"/cart/items/{product_id}",
            catch_response=True,
            name="DELETE /cart/items/{id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.cart_lines.pop(product_id, None)
            else:
                resp.failure(f"Remove failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def view_checkout(self):
        with self.client.get("/checkout", catch_response=True, name="GET /checkout") as resp:
            if resp.status_code != 200:
                resp.failure(f"Checkout view failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def submit_checkout(self):
        with self.client.post("/checkout", catch_response=True, name="POST /checkout") as resp:
            if resp.status_code == 201:
                self.state.checked_out(resp.json()["order_id"])
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_success(self):
        order_id = self.state.order_ids[-1]
        with self.client.get(
            f"/checkout/success/{order_id}",
            catch_response=True,
            name="GET /checkout/success/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Success page failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    wait_time = between(1.0, 3.0)
    weight = 2
    tasks = [CartToCheckoutJourney]


class DoubleSubmitUser(HttpUser):
    """Fills a cart, then submits checkout twice back to back."""

    wait_time = between(1.0, 2.0)
    weight = 1

    def on_start(self):
        self.product_ids = _load_product_ids(self.client)

    @task
    def double_submit(self):
        if not self.product_ids:
            return
        self.client.post(f"/cart/items/{random.choice(self.product_ids)}", name="POST /cart/items/{id}")

        with self.client.post("/checkout", catch_response=True, name="POST /checkout") as resp:
            if resp.status_code != 201:
                resp.failure(f"First submit failed: {resp.status_code} — {extract_error_detail(resp)}")
                return

        with self.client.post("/checkout", catch_response=True, name="POST /checkout (repeat)") as resp:
            if resp.status_code == 409:
                resp.success()
            else:
                resp.failure(f"Repeat submit should be rejected with 409, got {resp.status_code}")

        with self.client.get("/cart", catch_response=True, name="GET /cart") as resp:
            if resp.status_code == 200 and resp.json()["items"]:
                resp.failure("Cart not empty after checkout")
