"""Pytest configuration and fixtures for company settings tests."""

import os
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment variables BEFORE any app imports
os.environ["TP_SETTINGS_TOKEN_PD"] = "pd-token-0123456789abcdef"
os.environ["TP_SETTINGS_TOKEN_IN"] = "in-token-0123456789abcdef"
os.environ["TP_SETTINGS_TOKEN_AC"] = "ac-token-0123456789abcdef"
os.environ["TP_SETTINGS_VERIFY_ON_STARTUP"] = "false"

from company_settings.core.config import Settings, load_settings  # noqa: E402
from company_settings.core.environments import EnvironmentResolver  # noqa: E402

TEST_TOKENS = {
    "pd": "pd-token-0123456789abcdef",
    "in": "in-token-0123456789abcdef",
    "ac": "ac-token-0123456789abcdef",
}

TEST_BASE_URLS = {
    "pd": "http://settings.pd.test/api/internal/v1",
    "in": "http://settings.in.test/api/internal/v1",
    "ac": "http://settings.ac.test/api/internal/v1",
}

SAMPLE_JSON_BODY = (
    '{"settingDtoList":[{"settingUuid":"u1","type":"COMPANY","key":"k","value":"djE=",'
    '"encoded":true,"encrypted":false,"owner":"5","revision":"2","deleted":"false",'
    '"created":"c","modified":"m"}]}'
)


def make_response(status_code: int, text: str = "") -> MagicMock:
    """Create a mock httpx response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture
def settings() -> Settings:
    """Fully configured settings that ignore any local .env file."""
    return load_settings(
        _env_file=None,
        token_pd=TEST_TOKENS["pd"],
        token_in=TEST_TOKENS["in"],
        token_ac=TEST_TOKENS["ac"],
        base_url_pd=TEST_BASE_URLS["pd"],
        base_url_in=TEST_BASE_URLS["in"],
        base_url_ac=TEST_BASE_URLS["ac"],
        verify_on_startup=False,
    )


@pytest.fixture
def resolver(settings: Settings) -> EnvironmentResolver:
    return EnvironmentResolver(settings)


@pytest.fixture
def mock_http_client() -> MagicMock:
    """Mock httpx.AsyncClient; set ``get`` per test."""
    client = MagicMock()
    client.is_closed = False
    client.get = AsyncMock(return_value=make_response(200, SAMPLE_JSON_BODY))
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def mock_executor() -> MagicMock:
    """Mock RequestExecutor; set ``execute`` per test."""
    executor = MagicMock()
    executor.execute = AsyncMock()
    executor.close = AsyncMock()
    return executor


@pytest.fixture
def app(settings: Settings):
    from company_settings.main import create_app

    return create_app(settings)


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async test client against the ASGI app (lifespan not run)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
