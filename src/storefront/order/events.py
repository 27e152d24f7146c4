"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A checked-out cart was recorded as an order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    session_id = String(required=True)
    line_count = Integer(required=True)
    total = String(required=True)  # Decimal rendered as a string
    placed_at = DateTime(required=True)
