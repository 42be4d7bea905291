import pytest


@pytest.fixture(autouse=True)
def run_around_tests(_catalogue_domain, setup_db):
    """Push the catalogue domain context before each test, cleanup after."""
    from catalogue.channel import reset_channel

    reset_channel()
    ctx = _catalogue_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
    reset_channel()
