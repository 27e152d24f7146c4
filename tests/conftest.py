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
    """Pytest hook to run before collecting tests.

    Sets the Protean environment before the storefront domain is imported,
    so the test logging level and config overlay apply.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("STOREFRONT_SEED_CATALOGUE", "false")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
