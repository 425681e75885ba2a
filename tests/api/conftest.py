# tests/api/conftest.py
"""
Shared fixtures for API tests.
Uses FastAPI's TestClient around an app whose manager is driven by the tests.
"""

import pytest
from fastapi.testclient import TestClient

from ephemeral_exporter.api.app import create_app
from ephemeral_exporter.core.manager import EphemeralStorageManager


@pytest.fixture
def manager(mock_collector):
    """Returns a stopped manager backed by the mock collector."""
    return EphemeralStorageManager(mock_collector, "node-1", 15)


@pytest.fixture
def client(manager):
    """Creates a TestClient without lifespan so the manager is not started."""
    app = create_app(manager)
    with TestClient(app) as c:
        yield c
