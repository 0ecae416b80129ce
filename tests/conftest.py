"""Configuration for pytest."""
import pytest
from unittest.mock import Mock

from app.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test see the environment it sets up."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Settings with the public IP fallback disabled."""
    return Settings(environment="test", enable_fallback=False)


@pytest.fixture
def fallback_settings():
    """Settings with the public IP fallback enabled and a short timeout."""
    return Settings(environment="test", enable_fallback=True, fallback_timeout=0.5)


@pytest.fixture
def make_request():
    """Build a mock Starlette request with the given headers and peer address."""
    def _make_request(headers=None, client_host="127.0.0.1"):
        request = Mock()
        request.headers = headers or {}
        request.client = Mock(host=client_host) if client_host is not None else None
        return request
    return _make_request
