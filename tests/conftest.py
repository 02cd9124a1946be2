"""Pytest configuration for laundrify tests."""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


class MockResponse:
    """Mock aiohttp response."""

    def __init__(self, status: int, json_data=None, text_data: str = None):
        self.status = status
        self._json_data = json_data
        if text_data is None:
            text_data = "" if json_data is None else "json"
        self._text_data = text_data

    async def json(self, **kwargs):
        return self._json_data

    async def text(self):
        if isinstance(self._text_data, Exception):
            raise self._text_data
        return self._text_data


class MockContextManager:
    """Mock async context manager for aiohttp."""

    def __init__(self, response):
        self.response = response

    async def __aenter__(self):
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


class MockSession:
    """Mock aiohttp ClientSession.

    Responses are handed out in order; the last one is repeated.
    """

    def __init__(self):
        self.responses = []
        self.request_calls = []

    def add_response(self, status: int = 200, json_data=None, text_data: str = None):
        self.responses.append(MockResponse(status, json_data, text_data))

    def add_error(self, error: Exception):
        self.responses.append(error)

    def request(self, method, url, **kwargs):
        self.request_calls.append((method, url, kwargs))
        if len(self.responses) > 1:
            response = self.responses.pop(0)
        else:
            response = self.responses[0]
        return MockContextManager(response)


@pytest.fixture
def mock_session():
    """Create a mock aiohttp session."""
    return MockSession()


@pytest.fixture
def mock_sleep():
    """Skip backoff waits and record them."""
    with patch("asyncio.sleep", new_callable=AsyncMock) as sleep:
        yield sleep


@pytest.fixture
def hass():
    """Create a mock Home Assistant instance."""
    hass = MagicMock()
    hass.data = {}
    hass.config_entries = MagicMock()
    hass.config_entries.flow = MagicMock()
    hass.config_entries.flow.async_init = MagicMock()
    hass.config_entries.flow.async_configure = MagicMock()
    return hass


@pytest.fixture
def config_entry():
    """Create a mock config entry."""
    entry = MagicMock()
    entry.entry_id = "test_entry_id"
    entry.data = {
        "auth_code": "123-456",
        "scan_interval": 10,
    }
    return entry
