"""
Shared pytest fixtures for the client test suite.

Every client fixture talks to BASE_URL, which tests mock with respx.
"""

from collections.abc import AsyncGenerator

import pytest

from tests.constants import API_KEY, BASE_URL
from xenfo_client.client import XenfoClient
from xenfo_client.config import Config


@pytest.fixture
def config() -> Config:
    """Create a test configuration."""
    return Config(base_url=BASE_URL, api_key=API_KEY, timeout=10.0)


@pytest.fixture
async def client(config: Config) -> AsyncGenerator[XenfoClient, None]:
    """Create an API client for testing."""
    async with XenfoClient(config) as client:
        yield client
