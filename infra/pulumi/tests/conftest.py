"""Pytest configuration for infrastructure tests."""

import pytest

from pulumi_mocks import InfraMocks, install_mocks


@pytest.fixture
def mocks() -> InfraMocks:
    """Install a fresh mock engine for each test."""
    return install_mocks()


@pytest.fixture
def tags() -> dict:
    return {"Project": "container-api", "Environment": "test", "ManagedBy": "pulumi"}
