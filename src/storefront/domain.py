"""Storefront bounded context — Product Catalogue, Shopping Cart and Checkout.

The cart is a session-scoped CQRS aggregate. Checkout hands the cart's
contents to an order recorder and empties the cart.
"""

import structlog
from protean.domain import Domain

from storefront.utils.logging import configure_logging

configure_logging()

logger = structlog.get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
