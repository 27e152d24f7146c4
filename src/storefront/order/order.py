"""Order aggregate — the record a successful checkout leaves behind.

Prices and quantities are copied from the cart at checkout time and never
change afterwards.
"""

from datetime import UTC, datetime
from decimal import Decimal

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.order.events import OrderPlaced


@storefront.entity(part_of="Order")
class OrderLine:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=120)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    position = Integer(required=True, min_value=0)

    def line_total(self) -> Decimal:
        return Decimal(str(self.unit_price)) * self.quantity


@storefront.aggregate
class Order:
    session_id = String(required=True, max_length=255)
    lines = HasMany(OrderLine)
    total = Float(required=True, min_value=0.0)
    placed_at = DateTime()

    @classmethod
    def place(cls, session_id, lines_data, total):
        """Record an order from the checkout's line snapshot.

        Args:
            session_id: Session the cart belonged to.
            lines_data: List of dicts with product_id, product_name,
                        unit_price and quantity, in cart order.
            total: The checkout total.
        """
        if not lines_data:
            raise ValidationError({"lines": ["An order needs at least one line"]})

        now = datetime.now(UTC)
        order = cls(session_id=session_id, total=float(total), placed_at=now)
        for position, line in enumerate(lines_data):
            order.add_lines(
                OrderLine(
                    product_id=line["product_id"],
                    product_name=line["product_name"],
                    unit_price=float(line["unit_price"]),
                    quantity=int(line["quantity"]),
                    position=position,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                session_id=session_id,
                line_count=len(lines_data),
                total=str(order.total_amount()),
                placed_at=now,
            )
        )
        return order

    def ordered_lines(self) -> list[OrderLine]:
        return sorted(self.lines, key=lambda line: line.position)

    def total_amount(self) -> Decimal:
        return Decimal(str(self.total)).quantize(Decimal("0.01"))
