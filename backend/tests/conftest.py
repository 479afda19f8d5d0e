"""Pytest configuration and fixtures.

This module sets up test environment variables BEFORE any application
modules are imported, so the module-level app is built from test settings.
"""

import os

os.environ.setdefault("APP_NAME", "container-api-test")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("HOST", "127.0.0.1")
os.environ.setdefault("PORT", "3000")

import pytest
from fastapi.testclient import TestClient

from common.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Production-like settings: error details are redacted."""
    return Settings(_env_file=None, environment="production", port=3000)


@pytest.fixture
def dev_settings() -> Settings:
    return Settings(_env_file=None, environment="development", port=3000)


@pytest.fixture
def client(test_settings):
    """Create a test client for a freshly built app."""
    # Import here to ensure env vars are set first
    from api.main import create_app

    with TestClient(create_app(test_settings)) as test_client:
        yield test_client
