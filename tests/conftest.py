"""Shared pytest fixtures and configuration.

Fixture Categories:
1. Settings: clear_settings_cache (autouse), test_settings
2. Sample pages: paris_html
3. Mock backends: fake_genai_client, mock_fetch_page
4. Infrastructure: respx_mock, test_client, logfire_capture
"""

import os

# Logfire is not configured in tests; silence the "not configured" warnings
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

from unittest.mock import AsyncMock, MagicMock, patch

import logfire
import pytest
import respx

from webreader.config import Settings, get_settings

PARIS_HTML = (
    "<html><body><script>x=1</script>"
    "<p>Paris is the capital of France.</p></body></html>"
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test start from freshly loaded settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings():
    """Settings with deterministic values, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        gemini_model="gemini-test-model",
        gemini_api_key="test-api-key",
        max_extract_chars=25000,
        fetch_timeout_seconds=15.0,
        fetch_user_agent="web-reader-bot/1.0",
    )


@pytest.fixture
def paris_html():
    """Small page whose only visible text is one sentence about Paris."""
    return PARIS_HTML


@pytest.fixture
def fake_genai_client():
    """Stand-in for google.genai.Client.

    Only the async generate_content call is used by the service; it returns
    a {"text": "Paris"} response unless a test reconfigures it.
    """
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value={"text": "Paris"})
    return client


@pytest.fixture
def mock_fetch_page(paris_html):
    """Patch the page fetcher used by PageQuestionAnswerer."""
    with patch(
        "webreader.services.page_qa.fetch_page", new_callable=AsyncMock
    ) as mock_fetch:
        mock_fetch.return_value = paris_html
        yield mock_fetch


@pytest.fixture
def respx_mock():
    """Respx mock fixture for HTTP mocking."""
    with respx.mock:
        yield respx


@pytest.fixture
def test_client(fake_genai_client):
    """FastAPI TestClient with the Gemini client dependency overridden."""
    from fastapi.testclient import TestClient

    from webreader.api.extract import get_genai_client
    from webreader.main import app

    app.dependency_overrides[get_genai_client] = lambda: fake_genai_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    Yields a list of (level, args, kwargs) tuples, one per logfire call.
    """
    captured_logs = []

    original_info = logfire.info
    original_warn = logfire.warn
    original_error = logfire.error

    def capture_info(*args, **kwargs):
        captured_logs.append(("info", args, kwargs))
        return original_info(*args, **kwargs)

    def capture_warn(*args, **kwargs):
        captured_logs.append(("warn", args, kwargs))
        return original_warn(*args, **kwargs)

    def capture_error(*args, **kwargs):
        captured_logs.append(("error", args, kwargs))
        return original_error(*args, **kwargs)

    with (
        patch("logfire.info", side_effect=capture_info),
        patch("logfire.warn", side_effect=capture_warn),
        patch("logfire.error", side_effect=capture_error),
    ):
        yield captured_logs
