"""Product aggregate — the catalogue entry a cart line points at.

The catalogue is the sole owner of product data. Carts read a product once
when a line is created and never write back; ``stock`` is advisory only.
"""

from decimal import Decimal

from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Integer, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Product:
    name = String(required=True, max_length=120)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)

    def unit_price(self) -> Decimal:
        """Price as a ``Decimal`` so totals add up to the cent."""
        return Decimal(str(self.price))


@storefront.repository(part_of=Product)
class ProductRepository:
    """Catalogue lookups used by the cart's callers."""

    def find_by_id(self, product_id) -> Product | None:
        """Return the product, or ``None`` when the id is unknown."""
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            return None

    def list_all(self) -> list[Product]:
        """All products, cheapest first."""
        products = self._dao.query.all().items
        return sorted(products, key=lambda p: (p.price, p.name))

    def count(self) -> int:
        return self._dao.query.all().total
