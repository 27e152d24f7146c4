"""Cart aggregate (CQRS) — the shopper's per-session collection of line items.

A cart maps product ids to line items, keeps them in the order they were
first added, and recomputes its total on every call. Quantities only move
in steps of one: adding a product that is already in the cart bumps its
line, and decrementing stops at 1. Deleting a line is always an explicit
``remove_product``.
"""

from datetime import UTC, datetime
from decimal import Decimal

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartLineDecremented,
    CartLineIncremented,
    ProductAddedToCart,
    ProductRemovedFromCart,
)
from storefront.domain import storefront
from storefront.errors import EmptyCartError

CENT = Decimal("0.01")


@storefront.entity(part_of="Cart")
class CartLineItem:
    """One product in the cart.

    Name and unit price are read from the catalogue when the line is created;
    the catalogue remains the owner of the product itself.
    """

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=120)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    position = Integer(required=True, min_value=0)

    def line_total(self) -> Decimal:
        return Decimal(str(self.unit_price)) * self.quantity


@storefront.aggregate
class Cart:
    session_id = String(required=True, max_length=255)
    items = HasMany(CartLineItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def each_product_has_a_single_line(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def line_for(self, product_id) -> CartLineItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def line_items(self) -> list[CartLineItem]:
        """Lines in the order their products were first added.

        The entries are the cart's own line objects, so they always reflect
        the current quantities.
        """
        return sorted(self.items, key=lambda item: item.position)

    def total(self) -> Decimal:
        return sum((item.line_total() for item in self.items), Decimal("0")).quantize(CENT)

    def is_empty(self) -> bool:
        return not self.items

    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_product(self, product):
        """Add one unit of ``product``.

        The caller resolves the product in the catalogue first; unknown ids
        never reach the cart.
        """
        line = self.line_for(product.id)
        if line:
            line.quantity += 1
        else:
            line = CartLineItem(
                product_id=str(product.id),
                product_name=product.name,
                unit_price=product.price,
                quantity=1,
                position=max((i.position for i in self.items), default=-1) + 1,
            )
            self.add_items(line)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductAddedToCart(
                cart_id=str(self.id),
                session_id=self.session_id,
                product_id=str(product.id),
                quantity=line.quantity,
            )
        )

    def increment_line(self, product_id):
        """Add one unit to an existing line. Unknown ids are ignored."""
        line = self.line_for(product_id)
        if line is None:
            return

        previous_quantity = line.quantity
        line.quantity = previous_quantity + 1
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineIncremented(
                cart_id=str(self.id),
                session_id=self.session_id,
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=line.quantity,
            )
        )

    def decrement_line(self, product_id):
        """Take one unit off a line, stopping at 1. Unknown ids are ignored."""
        line = self.line_for(product_id)
        if line is None or line.quantity <= 1:
            return

        previous_quantity = line.quantity
        line.quantity = previous_quantity - 1
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineDecremented(
                cart_id=str(self.id),
                session_id=self.session_id,
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=line.quantity,
            )
        )

    def remove_product(self, product_id):
        """Delete the product's line. Removing an absent product is a no-op."""
        line = self.line_for(product_id)
        if line is None:
            return

        self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductRemovedFromCart(
                cart_id=str(self.id),
                session_id=self.session_id,
                product_id=str(product_id),
            )
        )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def clear(self):
        """Remove every line. The cart stays usable for the same session."""
        lines = list(self.items)
        if not lines:
            return

        for line in lines:
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                session_id=self.session_id,
                lines_removed=len(lines),
            )
        )

    def check_out(self, order_id):
        """Close out the cart once its order has been recorded."""
        if self.is_empty():
            raise EmptyCartError(self.session_id)

        total = self.total()
        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                session_id=self.session_id,
                order_id=str(order_id),
                total=str(total),
            )
        )
        self.clear()
