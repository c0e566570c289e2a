"""
Pytest Configuration for VerStamp Testing
=========================================

Root conftest.py - delegates to tests/fixtures/ for reusable components.
"""

import pytest

# Import shared fixtures
from tests.fixtures import *


def pytest_collection_modifyitems(config, items):
    """Automatically add markers based on test location."""
    for item in items:
        if "/unit/" in item.nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in item.nodeid:
            item.add_marker(pytest.mark.integration)

        if "/cli/" in item.nodeid:
            item.add_marker(pytest.mark.cli)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep the developer's VERSTAMP_* and SOURCE_DATE_EPOCH out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("VERSTAMP_") or key == "SOURCE_DATE_EPOCH":
            monkeypatch.delenv(key, raising=False)
