"""
Shared fixtures for the Consult-Scribe test suite.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from consultscribe.core.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Rebuild settings from the (monkeypatched) environment for every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 5, 1, 9, 30)


@pytest.fixture
def client():
    """Create a test client for a freshly built FastAPI app."""
    from consultscribe.app import create_app

    return TestClient(create_app())
