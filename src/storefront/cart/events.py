"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class ProductAddedToCart:
    """A product was put in the cart, either as a new line or one more unit."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    session_id = String(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartLineIncremented:
    __version__ = "v1"

    cart_id = Identifier(required=True)
    session_id = String(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartLineDecremented:
    __version__ = "v1"

    cart_id = Identifier(required=True)
    session_id = String(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class ProductRemovedFromCart:
    """A line was deleted from the cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    session_id = String(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """Every line was removed; the cart itself lives on for the session."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    session_id = String(required=True)
    lines_removed = Integer(required=True)


@storefront.event(part_of="Cart")
class CartCheckedOut:
    """The cart's contents became an order."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    session_id = String(required=True)
    order_id = Identifier(required=True)
    total = String(required=True)  # Decimal rendered as a string
