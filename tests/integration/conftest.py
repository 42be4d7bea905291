"""Fixtures for cross-domain integration tests.

These tests exercise Ordering and Catalogue together: products are managed
in the Catalogue domain and snapshotted into carts and orders in Ordering.
"""

import pytest


def _reset(domain):
    from protean import current_domain

    with domain.domain_context():
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        for _, broker in current_domain.brokers.items():
            broker._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def ordering_ctx(_ordering_domain, _catalogue_domain, setup_db):
    """Push ordering domain context for a test, with cleanup of both domains."""
    from catalogue.channel import reset_channel

    reset_channel()
    ctx = _ordering_domain.domain_context()
    ctx.push()

    yield _ordering_domain

    ctx.pop()
    _reset(_ordering_domain)
    _reset(_catalogue_domain)
    reset_channel()


@pytest.fixture
def catalogue_ctx(_catalogue_domain):
    """Run a block inside the catalogue domain context."""
    return _catalogue_domain.domain_context
