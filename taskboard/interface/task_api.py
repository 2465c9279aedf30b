"""HTTP client for the remote task store."""

import asyncio
import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from taskboard.core.config import constants, settings
from taskboard.core.credentials import CredentialProvider
from taskboard.core.errors import (
    TaskStoreAuthError,
    TaskStoreError,
    TaskStoreRejectedError,
    TaskStoreServerError,
    TaskStoreTransportError,
)
from taskboard.core.logging import span
from taskboard.domain.create_models import TaskDraft
from taskboard.domain.task import Attachment, Task
from taskboard.domain.update_models import TaskPatch


logger = logging.getLogger(__name__)


# Wire field name -> Task field name
_RECORD_FIELDS: dict[str, str] = {
    "id": "id",
    "title": "title",
    "description": "description",
    "category": "category",
    "priority": "priority",
    "is_done": "completed",
    "due_date": "due_date",
    "created_at": "created_at",
    "updated_at": "updated_at",
    "attachments": "attachments",
}

_PATCH_FIELDS: dict[str, str] = {task_field: wire for wire, task_field in _RECORD_FIELDS.items()}


class TaskStore(Protocol):
    """Logical operations offered by the remote task store."""

    async def list_tasks(self) -> list[Task]: ...

    async def create_task(self, draft: TaskDraft) -> Task: ...

    async def update_task(self, task_id: str, patch: TaskPatch) -> Task: ...

    async def delete_task(self, task_id: str) -> None: ...


def _attachment_to_wire(attachment: Attachment) -> dict[str, str]:
    return {"file_name": attachment.name, "url": attachment.url, "file_type": attachment.media_type}


def _attachment_from_wire(data: dict[str, Any]) -> dict[str, Any]:
    attachment: dict[str, Any] = {
        "name": data.get("file_name", data.get("name")),
        "url": data.get("url"),
    }
    media_type = data.get("file_type", data.get("media_type"))
    if media_type:
        attachment["media_type"] = media_type
    return attachment


def _wire_value(value: Any) -> Any:
    """Convert a model value into its JSON wire form."""
    if isinstance(value, list):
        return [_attachment_to_wire(item) if isinstance(item, Attachment) else item for item in value]
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def draft_to_payload(draft: TaskDraft) -> dict[str, Any]:
    """Build the create request body for a draft."""
    return {
        "title": draft.title,
        "description": draft.description,
        "category": draft.category.value,
        "priority": draft.priority.value,
        "due_date": _wire_value(draft.due_date),
        "attachments": _wire_value(draft.attachments),
    }


def patch_to_payload(patch: TaskPatch) -> dict[str, Any]:
    """Build the update request body containing only the patched fields."""
    return {_PATCH_FIELDS[name]: _wire_value(value) for name, value in patch.changes().items()}


def record_to_task(record: dict[str, Any]) -> Task:
    """Parse a task store record, keeping only the fields the record carries.

    Fields the store omits stay unset on the returned Task, so callers can
    merge just the fields in ``model_fields_set``.

    Raises:
        TaskStoreError: If the record cannot be parsed into a Task
    """
    if not isinstance(record, dict):
        msg = f"Malformed task record from task store: {record!r}"
        raise TaskStoreError(msg)

    data: dict[str, Any] = {}
    for wire_name, field_name in _RECORD_FIELDS.items():
        if wire_name in record and record[wire_name] is not None:
            data[field_name] = record[wire_name]

    if "attachments" in data:
        data["attachments"] = [_attachment_from_wire(item) for item in data["attachments"]]

    try:
        return Task.model_validate(data)
    except ValidationError as e:
        msg = f"Malformed task record from task store: {e}"
        raise TaskStoreError(msg) from e


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        msg = "Task store returned a body that is not JSON"
        raise TaskStoreServerError(msg, status_code=response.status_code) from e


def _error_message(response: httpx.Response) -> str:
    """Extract the {"error": ...} message from a failed response."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"Task store returned status {response.status_code}"


class TaskStoreClient:
    """Task store client authenticating every request with a bearer credential.

    A missing credential is not an error here: the request goes out without an
    Authorization header and the store's 401 surfaces as TaskStoreAuthError.
    """

    def __init__(
        self,
        *,
        credentials: CredentialProvider,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
    ) -> None:
        self._credentials = credentials
        self._base_url = (base_url or settings.task_api_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.api_timeout_seconds
        self._max_retries = max(1, max_retries if max_retries is not None else settings.list_max_retries)
        self._retry_delay = retry_delay if retry_delay is not None else settings.list_retry_delay

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self._credentials.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _send(self, method: str, path: str, *, payload: dict[str, Any] | None = None) -> httpx.Response:
        """Send one request and map failures onto the TaskStoreError hierarchy."""
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(method, url, json=payload, headers=self._headers())
        except httpx.TransportError as e:
            msg = f"{method} {url} failed: {e}"
            raise TaskStoreTransportError(msg) from e

        if response.is_success:
            return response

        message = _error_message(response)
        status_code = response.status_code
        if status_code == constants.HTTP_UNAUTHORIZED:
            raise TaskStoreAuthError(message, status_code=status_code)
        if status_code < constants.HTTP_SERVER_ERROR:
            raise TaskStoreRejectedError(message, status_code=status_code)
        raise TaskStoreServerError(message, status_code=status_code)

    async def list_tasks(self) -> list[Task]:
        """Fetch every task of the session.

        The request is idempotent, so transport failures and 5xx responses are
        retried with exponential backoff.

        Returns:
            Tasks in the order the store returned them

        Raises:
            TaskStoreError: If the list could not be fetched
        """
        with span("task_api.list_tasks"):
            for attempt in range(self._max_retries):
                try:
                    response = await self._send("GET", "/todos")
                    break
                except (TaskStoreTransportError, TaskStoreServerError) as e:
                    if attempt >= self._max_retries - 1:
                        raise
                    delay = self._retry_delay * (2**attempt)
                    logger.warning("Listing tasks failed (attempt %d), retrying in %.2fs: %s", attempt + 1, delay, e)
                    await asyncio.sleep(delay)

            body = _json_body(response)
            records = body.get("todos") if isinstance(body, dict) else body
            tasks = [record_to_task(record) for record in records or []]
            logger.debug("Fetched %d tasks", len(tasks))
            return tasks

    async def create_task(self, draft: TaskDraft) -> Task:
        """Create a task and return the store's record with its assigned ID."""
        with span("task_api.create_task"):
            response = await self._send("POST", "/todos", payload=draft_to_payload(draft))
            task = record_to_task(_json_body(response))
            if not task.is_persisted:
                msg = "Task store acknowledged a create without assigning an ID"
                raise TaskStoreError(msg)
            return task

    async def update_task(self, task_id: str, patch: TaskPatch) -> Task:
        """Apply a partial update and return the merged record."""
        with span("task_api.update_task"):
            response = await self._send("PUT", f"/todos/{task_id}", payload=patch_to_payload(patch))
            return record_to_task(_json_body(response))

    async def delete_task(self, task_id: str) -> None:
        """Delete a task. The store acknowledges with an empty body."""
        with span("task_api.delete_task"):
            await self._send("DELETE", f"/todos/{task_id}")
