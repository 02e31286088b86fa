"""Test fixtures for the web layer."""

import pytest
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture
def client(schemas_dir):
    """Create a TestClient reading stored schemas from a temp directory."""
    return TestClient(app)
