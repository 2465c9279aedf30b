"""Tests for controller wiring."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from taskboard.core.config import Settings
from taskboard.core.credentials import InMemoryCredentialStore
from taskboard.main import build_controller, startup
from taskboard.services.task_controller import LoadState


async def test_build_controller_uses_settings() -> None:
    settings = Settings(task_api_url="http://tasks.test/api", task_api_token="seed", _env_file=None)
    response = MagicMock(spec=httpx.Response)
    response.status_code = 200
    response.is_success = True
    response.json.return_value = {"todos": [{"id": 1, "title": "Buy Milk", "is_done": False}]}

    controller = build_controller(settings)
    with patch("httpx.AsyncClient.request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = response
        await controller.load()

    assert controller.state == LoadState.READY
    assert controller.tasks[0].id == "1"
    assert mock_request.call_args.args[1] == "http://tasks.test/api/todos"
    assert mock_request.call_args.kwargs["headers"]["Authorization"] == "Bearer seed"


async def test_unauthorized_load_clears_shared_credentials() -> None:
    credentials = InMemoryCredentialStore("expired")
    response = MagicMock(spec=httpx.Response)
    response.status_code = 401
    response.is_success = False
    response.json.return_value = {"error": "invalid or expired token"}

    controller = build_controller(Settings(_env_file=None), credentials=credentials)
    with patch("httpx.AsyncClient.request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = response
        result = await controller.load()

    assert result.success is False
    assert controller.state == LoadState.ERROR
    assert credentials.get_token() is None


def test_startup_configures_logfire() -> None:
    with patch("taskboard.main.configure_logfire") as mock_configure:
        controller = startup(Settings(_env_file=None))

    mock_configure.assert_called_once()
    assert controller.state == LoadState.IDLE
