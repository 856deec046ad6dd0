"""Root conftest — shared test configuration and dispatcher doubles."""

import os
from unittest.mock import MagicMock

import pytest

from asana_time_tracking.config import get_settings
from asana_time_tracking.services.time_tracking_entries import TimeTrackingEntriesService

# Ensure tests don't accidentally use a real access token
os.environ["ASANA_ACCESS_TOKEN"] = "0/test-fake-token"


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_client():
    """Dispatcher double: records request() calls, returns [] unless configured."""
    client = MagicMock()
    client.request.return_value = []
    return client


@pytest.fixture
def service(mock_client):
    return TimeTrackingEntriesService(mock_client)
