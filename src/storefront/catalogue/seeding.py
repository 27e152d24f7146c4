"""Starter catalogue — command and handler that fill an empty catalogue."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)

STARTER_PRODUCTS = (
    {"name": "Red T-Shirt", "description": "Comfortable red t-shirt", "price": 19.99, "stock": 50},
    {"name": "Blue Jeans", "description": "Classic fit jeans", "price": 39.99, "stock": 30},
    {"name": "Sneakers", "description": "White running shoes", "price": 59.99, "stock": 20},
)


@storefront.command(part_of="Product")
class SeedCatalogue:
    """Add the starter products, but only when the catalogue is empty."""

    requested_by = String(max_length=50, default="startup")


@storefront.command_handler(part_of=Product)
class SeedCatalogueHandler:
    @handle(SeedCatalogue)
    def seed_catalogue(self, command):
        repo = current_domain.repository_for(Product)
        existing = repo.count()
        if existing:
            logger.info(
                "Catalogue already populated, skipping seed",
                product_count=existing,
                requested_by=command.requested_by,
            )
            return 0

        for data in STARTER_PRODUCTS:
            repo.add(Product(**data))

        logger.info(
            "Seeded starter catalogue",
            product_count=len(STARTER_PRODUCTS),
            requested_by=command.requested_by,
        )
        return len(STARTER_PRODUCTS)
