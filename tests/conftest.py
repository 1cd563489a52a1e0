import pytest
from unittest.mock import MagicMock, patch

from savelink_bot.schemas.command import CommandRequest, ExtractionResult

REQUIRED_ENV = {
    "SLACK_BOT_TOKEN": "xoxb-test",
    "SLACK_APP_TOKEN": "xapp-test",
    "GITHUB_TOKEN": "ghp-test",
    "GITHUB_OWNER": "test-owner",
    "GITHUB_REPO": "test-repo",
    "AMBASSADOR_ROLE_NAME": "ambassadors",
}

@pytest.fixture
def settings_env(monkeypatch, tmp_path):
    """
    Sets every required variable and runs from an empty directory so a
    developer's .env file can't leak into the test.
    """
    monkeypatch.chdir(tmp_path)
    for name, value in REQUIRED_ENV.items():
        monkeypatch.setenv(name, value)

    from savelink_bot.config import get_settings
    get_settings.cache_clear()
    yield REQUIRED_ENV
    get_settings.cache_clear()

@pytest.fixture
def mock_httpx():
    """
    Mocks httpx.Client for retrieval and tracker tests.
    """
    with patch("httpx.Client") as mock_client:
        yield mock_client

@pytest.fixture
def command_request():
    return CommandRequest(
        url="https://example.com",
        title_override=None,
        requester_id="U_USER",
        requester_name="testuser",
    )

@pytest.fixture
def extraction_result():
    return ExtractionResult(
        title="Test Article",
        description="Test description",
        source_url="https://example.com",
    )
