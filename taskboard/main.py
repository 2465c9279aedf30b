"""taskboard - wiring of the task view controller."""

import logging

from taskboard.core.config import Settings, settings
from taskboard.core.credentials import InMemoryCredentialStore
from taskboard.core.logging import configure_logfire
from taskboard.interface.task_api import TaskStoreClient
from taskboard.services.task_controller import TaskViewController


logger = logging.getLogger(__name__)


def build_controller(
    app_settings: Settings | None = None,
    *,
    credentials: InMemoryCredentialStore | None = None,
) -> TaskViewController:
    """Create a controller talking to the configured task store.

    Args:
        app_settings: Settings to use (defaults to the environment)
        credentials: Credential store to share with the caller; seeded from
            TASK_API_TOKEN when omitted

    Returns:
        A controller in the IDLE state; call load() to fetch tasks
    """
    app_settings = app_settings or settings
    credentials = credentials or InMemoryCredentialStore(app_settings.task_api_token)
    client = TaskStoreClient(
        credentials=credentials,
        base_url=app_settings.task_api_url,
        timeout=app_settings.api_timeout_seconds,
        max_retries=app_settings.list_max_retries,
        retry_delay=app_settings.list_retry_delay,
    )
    logger.info("Task store configured at %s", app_settings.task_api_url)
    return TaskViewController(store=client, credentials=credentials)


def startup(app_settings: Settings | None = None) -> TaskViewController:
    """Configure observability and build the controller."""
    configure_logfire()
    return build_controller(app_settings)
