import pytest


@pytest.fixture(autouse=True)
def run_around_tests(_ordering_domain, _catalogue_domain, setup_db):
    """Push the ordering domain context before each test, cleanup after."""
    ctx = _ordering_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()

    # Products added through the catalogue while testing checkout
    with _catalogue_domain.domain_context():
        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture
def customer():
    return {
        "full_name": "Amina Yusuf",
        "phone": "+234 801 234 5678",
        "city": "Lagos",
        "address": "12 Marina Road",
        "email": "amina@example.com",
    }


@pytest.fixture
def line_items():
    return [
        {"product_id": "prod-headphones", "product_name": "Headphones", "unit_price": 10.00, "quantity": 2},
        {"product_id": "prod-cable", "product_name": "USB Cable", "unit_price": 5.00, "quantity": 1},
    ]


@pytest.fixture
def add_product(_catalogue_domain):
    """Create a catalogue product and return its id."""
    from catalogue import services

    def _add(name="Headphones", price=10.0, in_stock=True, **fields):
        with _catalogue_domain.domain_context():
            return services.add_product(name=name, price=price, in_stock=in_stock, **fields)

    return _add
