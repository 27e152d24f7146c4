"""Order recording — command, handler, and the recorder checkout talks to."""

import json

import structlog
from protean import handle
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    session_id = String(required=True, max_length=255)
    lines = Text(required=True)  # JSON: list of line dicts
    total = Float(required=True, min_value=0.0)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines_data = json.loads(command.lines) if isinstance(command.lines, str) else command.lines

        order = Order.place(
            session_id=command.session_id,
            lines_data=lines_data,
            total=command.total,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            session_id=command.session_id,
            line_count=len(lines_data),
            total=str(order.total_amount()),
        )
        return str(order.id)


class OrderRecorder:
    """Records a checkout as an ``Order`` and returns the new order's id."""

    def record(self, session_id, line_items, total) -> str:
        lines = [
            {
                "product_id": str(line.product_id),
                "product_name": line.product_name,
                "unit_price": str(line.unit_price),
                "quantity": line.quantity,
            }
            for line in line_items
        ]
        return current_domain.process(
            PlaceOrder(session_id=str(session_id), lines=json.dumps(lines), total=float(total)),
            asynchronous=False,
        )
