"""Pytest configuration for smoke tests.

Smoke tests hit a deployed load balancer. They only run when API_ENDPOINT
is set, e.g. to the ``load_balancer_url`` stack output.
"""

import os

import httpx
import pytest

API_ENDPOINT = os.getenv("API_ENDPOINT", "")


@pytest.fixture
def api_url() -> str:
    """Get the API URL from the environment, skipping when absent."""
    if not API_ENDPOINT:
        pytest.skip("API_ENDPOINT not set; no deployment to smoke test")
    return API_ENDPOINT.rstrip("/")


@pytest.fixture
def client(api_url):
    """Create an HTTP client for the API."""
    with httpx.Client(base_url=api_url, timeout=30.0) as http_client:
        yield http_client
