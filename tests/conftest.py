import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before any domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _catalogue_domain():
    """Initialize the catalogue domain once per session."""
    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(scope="session")
def _ordering_domain(_catalogue_domain):
    """Initialize the ordering domain once per session.

    Ordering reads product snapshots from the catalogue, so both are ready.
    """
    from ordering.domain import ordering

    ordering.init()
    return ordering


@pytest.fixture(scope="session")
def setup_db(_ordering_domain, _catalogue_domain):
    from shared.db import drop_db, setup_db

    setup_db(_ordering_domain)
    setup_db(_catalogue_domain)

    yield

    drop_db(_ordering_domain)
    drop_db(_catalogue_domain)


@pytest.fixture
def admin_headers(monkeypatch):
    monkeypatch.setenv("STOREFRONT_ADMIN_TOKEN", "test-admin-token")
    return {"X-Admin-Token": "test-admin-token"}
