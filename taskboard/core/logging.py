"""Observability for taskboard: Logfire setup, spans and structured log helpers.

Modules log through logging.getLogger(__name__). configure_logfire() routes
those records to Logfire and traces every task store request made with httpx.
Controller and client operations open a span() each, and failures are logged
with log_with_context() so the operation name and error code travel as fields.
"""

import logging

import logfire

from taskboard.core.config import settings


def configure_logfire() -> None:
    """Configure Pydantic Logfire and trace outgoing task store requests."""
    logfire.configure(
        token=settings.logfire_token,
        service_name="taskboard",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    logfire.instrument_httpx()

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured with httpx instrumentation")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for controller and client operations.

    Usage:
        with span("task_controller.load"):
            ...
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (task_id, operation, etc.)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)
