"""Tests for configuration."""

from taskboard.core.config import Settings, constants


def test_defaults(monkeypatch) -> None:
    """Test defaults point at a local task store."""
    monkeypatch.delenv("TASK_API_URL", raising=False)
    settings = Settings(_env_file=None)

    assert settings.task_api_url == "http://localhost:8080/api"
    assert settings.list_max_retries == 3


def test_settings_read_environment(monkeypatch) -> None:
    """Test environment variables override defaults."""
    monkeypatch.setenv("TASK_API_URL", "https://tasks.example.com/api")
    monkeypatch.setenv("TASK_API_TOKEN", "abc")

    settings = Settings(_env_file=None)

    assert settings.task_api_url == "https://tasks.example.com/api"
    assert settings.task_api_token == "abc"


def test_field_limits_match_task_store() -> None:
    assert constants.TITLE_MAX_LENGTH == 255
    assert constants.DESCRIPTION_MAX_LENGTH == 1000
