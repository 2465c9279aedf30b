"""Tests for observability setup."""

import logging
from unittest.mock import patch

from taskboard.core.logging import configure_logfire, log_with_context


def test_configure_logfire_instruments_httpx() -> None:
    with (
        patch("taskboard.core.logging.logfire.configure") as mock_configure,
        patch("taskboard.core.logging.logfire.instrument_httpx") as mock_instrument,
    ):
        configure_logfire()

    assert mock_configure.call_args.kwargs["service_name"] == "taskboard"
    assert mock_configure.call_args.kwargs["send_to_logfire"] == "if-token-present"
    mock_instrument.assert_called_once_with()


def test_log_with_context_attaches_fields(caplog) -> None:
    logger = logging.getLogger("taskboard.test")

    with caplog.at_level(logging.WARNING, logger="taskboard.test"):
        log_with_context(logger, "warning", "Task operation delete failed", operation="delete", error_code="E1")

    record = caplog.records[-1]
    assert record.getMessage() == "Task operation delete failed"
    assert record.operation == "delete"
    assert record.error_code == "E1"
