"""Pytest configuration and fixtures."""

import pytest

from services.playlist_service.src.config import ServiceConfig, reset_config, set_config
from tests.shared_utilities import FakeCatalog, FakeFetcher


@pytest.fixture(autouse=True)
def test_config():
    """Install a configuration without request delays.

    Resets the global configuration after each test.
    """
    config = ServiceConfig()
    config.scraping.rate_limit_delay = 0.0
    config.scraping.retry_delay = 0.0
    config.catalog.client_id = "test-client"
    config.catalog.client_secret = "test-secret"
    set_config(config)
    yield config
    reset_config()


@pytest.fixture
def fake_fetcher():
    """Create an empty fake fetcher."""
    return FakeFetcher()


@pytest.fixture
def fake_catalog():
    """Create an empty fake catalog."""
    return FakeCatalog()
