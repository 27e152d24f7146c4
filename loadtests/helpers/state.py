"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, and its own session
cookie through the HTTP client. Nothing is shared across users.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks what a single simulated shopper has put in their cart."""

    product_ids: list[str] = field(default_factory=list)
    cart_lines: dict[str, int] = field(default_factory=dict)
    order_ids: list[str] = field(default_factory=list)

    def added(self, product_id: str) -> None:
        self.cart_lines[product_id] = self.cart_lines.get(product_id, 0) + 1

    def checked_out(self, order_id: str) -> None:
        self.order_ids.append(order_id)
        self.cart_lines.clear()

    @property
    def cart_is_empty(self) -> bool:
        return not self.cart_lines
