import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    """Run each test inside the domain context and wipe the in-memory stores afterwards."""
    from protean import current_domain

    with storefront_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def make_product():
    """Factory for catalogue products, persisted so the cart's callers can resolve them."""
    from protean import current_domain
    from storefront.catalogue.product import Product

    def _make(name="Red T-Shirt", price=19.99, stock=50, description=None):
        product = Product(name=name, price=price, stock=stock, description=description)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def t_shirt(make_product):
    return make_product("Red T-Shirt", 19.99, 50, "Comfortable red t-shirt")


@pytest.fixture()
def jeans(make_product):
    return make_product("Blue Jeans", 39.99, 30, "Classic fit jeans")


@pytest.fixture()
def sneakers(make_product):
    return make_product("Sneakers", 59.99, 20, "White running shoes")
