"""Task view controller: in-memory task collection with optimistic mutations."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ValidationError

from taskboard.core.credentials import CredentialProvider
from taskboard.core.errors import (
    ErrorResponse,
    TaskNotFoundError,
    TaskStoreAuthError,
    TaskStoreError,
    TaskValidationError,
    classify_error,
)
from taskboard.core.logging import log_with_context, span
from taskboard.domain.calendar import CalendarMonth
from taskboard.domain.create_models import TaskDraft
from taskboard.domain.filters import FilterState
from taskboard.domain.task import Task
from taskboard.domain.update_models import TaskPatch
from taskboard.interface.task_api import TaskStore
from taskboard.services import calendar_service, view_service
from taskboard.services.optimistic import Rollback, run_optimistic


logger = logging.getLogger(__name__)


class LoadState(StrEnum):
    """Load lifecycle of the task collection."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class OperationResult(BaseModel):
    """Outcome of a controller operation."""

    success: bool
    task: Task | None = None
    error: ErrorResponse | None = None


@dataclass(eq=False)
class _PendingChange:
    """Optimistic field change of one task awaiting the task store."""

    fields: frozenset[str]
    previous: dict[str, Any] = field(default_factory=dict)


def _validation_message(error: ValidationError) -> str:
    """First human-readable message of a pydantic validation error."""
    message = error.errors()[0]["msg"]
    return message.removeprefix("Value error, ")


class TaskViewController:
    """Owns the session's task collection and derives views from it.

    Mutations are optimistic: the local change is visible immediately and
    undone if the task store rejects it. The load state only changes on
    load(); mutations never pass through LOADING.

    Toggle and update register a pending change per task. When a change
    settles, each field it touched is written back (the prior value on failure,
    the store's value on success) unless a newer pending change of the same
    task also touched that field. The newer change then inherits the value as
    the one to restore if it fails itself.
    """

    def __init__(self, *, store: TaskStore, credentials: CredentialProvider) -> None:
        self._store = store
        self._credentials = credentials
        self._tasks: list[Task] = []
        self._pending: dict[str, list[_PendingChange]] = {}
        self.state = LoadState.IDLE
        self.error: ErrorResponse | None = None

    @property
    def tasks(self) -> list[Task]:
        """Copy of the collection in display order."""
        return list(self._tasks)

    @property
    def active_count(self) -> int:
        return view_service.active_count(self._tasks)

    def get_task(self, task_id: str) -> Task | None:
        return next((task for task in self._tasks if task.id == task_id), None)

    def dismiss_error(self) -> None:
        self.error = None

    # Views

    def derive_view(self, filter_state: FilterState | None = None) -> list[Task]:
        """Filtered and ordered tasks for the given filter state. Pure."""
        return view_service.derive_view(self._tasks, filter_state or FilterState())

    def calendar_month(self, year: int, month: int) -> CalendarMonth:
        """Month grid with start and due markers for every task."""
        return calendar_service.build_month(self._tasks, year=year, month=month)

    # Remote operations

    async def load(self) -> OperationResult:
        """Replace the collection with the task store's list.

        On failure the previously loaded tasks are kept and the state becomes
        ERROR; calling load() again retries.
        """
        with span("task_controller.load"):
            self.state = LoadState.LOADING
            self.error = None
            try:
                tasks = await self._store.list_tasks()
            except TaskStoreError as e:
                self.state = LoadState.ERROR
                return self._fail("load", e)

            self._tasks = list(tasks)
            self.state = LoadState.READY
            logger.info("Loaded %d tasks", len(self._tasks))
            return OperationResult(success=True)

    async def add(self, draft: TaskDraft | dict[str, Any]) -> OperationResult:
        """Create a task and prepend the store's record.

        Invalid drafts (e.g. an empty title) are rejected before any request.
        """
        with span("task_controller.add"):
            try:
                valid_draft = draft if isinstance(draft, TaskDraft) else TaskDraft.model_validate(draft)
            except ValidationError as e:
                return self._fail("add", TaskValidationError(_validation_message(e)))

            try:
                task = await self._store.create_task(valid_draft)
            except TaskStoreError as e:
                return self._fail("add", e)

            if not task.is_persisted:
                return self._fail("add", TaskStoreError("Task store did not assign an ID"))

            self._tasks = [task, *self._tasks]
            logger.info("Created task %s: %s", task.id, task.title)
            return OperationResult(success=True, task=task)

    async def toggle_completion(self, task_id: str, completed: bool) -> OperationResult:
        """Set the completed flag, reverting to the prior value on failure."""
        with span("task_controller.toggle_completion"):
            return await self._patch("toggle_completion", task_id, TaskPatch(completed=completed))

    async def update(self, task_id: str, patch: TaskPatch | dict[str, Any]) -> OperationResult:
        """Apply a partial update; on failure only the patched fields are reverted."""
        with span("task_controller.update"):
            try:
                valid_patch = patch if isinstance(patch, TaskPatch) else TaskPatch.model_validate(patch)
            except ValidationError as e:
                return self._fail("update", TaskValidationError(_validation_message(e)))
            return await self._patch("update", task_id, valid_patch)

    async def delete(self, task_id: str) -> OperationResult:
        """Remove a task; on failure the task is reinserted where it was.

        Changes confirmed while the delete was in flight are kept. The task
        goes back after the task that preceded it, or at its old index if that
        neighbour is gone.
        """
        with span("task_controller.delete"):
            try:
                task = self._require_task(task_id)
            except TaskStoreError as e:
                return self._fail("delete", e)

            def apply() -> Rollback:
                index = next(i for i, t in enumerate(self._tasks) if t.id == task_id)
                removed = self._tasks[index]
                anchor_id = self._tasks[index - 1].id if index > 0 else None
                self._tasks = [t for t in self._tasks if t.id != task_id]

                def rollback() -> None:
                    if self.get_task(task_id) is not None:
                        return
                    ids = [t.id for t in self._tasks]
                    if anchor_id is None:
                        position = 0
                    elif anchor_id in ids:
                        position = ids.index(anchor_id) + 1
                    else:
                        position = min(index, len(self._tasks))
                    self._tasks = [*self._tasks[:position], removed, *self._tasks[position:]]

                return rollback

            outcome = await run_optimistic(
                name=f"delete task {task_id}",
                apply=apply,
                attempt=lambda: self._store.delete_task(task_id),
            )
            if not outcome.succeeded:
                return self._fail("delete", outcome.error)

            logger.info("Deleted task %s", task_id)
            return OperationResult(success=True, task=task)

    # Internals

    def _require_task(self, task_id: str | None) -> Task:
        if not task_id:
            msg = "Task has not been saved yet"
            raise TaskValidationError(msg)
        task = self.get_task(task_id)
        if task is None:
            msg = f"Task {task_id} not found"
            raise TaskNotFoundError(msg)
        return task

    def _replace(self, task_id: str, change: Callable[[Task], Task]) -> None:
        self._tasks = [change(task) if task.id == task_id else task for task in self._tasks]

    def _settle(
        self,
        task_id: str,
        change: _PendingChange,
        values: dict[str, Any],
        *,
        confirmed: bool = False,
    ) -> None:
        """Retire a pending change, writing back the values it settled on.

        A field also touched by a newer pending change keeps that change's
        optimistic value; the newer change restores ours if it fails. Store
        values for fields an older pending change touched are skipped; that
        change writes them when it settles.
        """
        pending = self._pending.get(task_id, [])
        position = pending.index(change) if change in pending else len(pending)
        older, newer = pending[:position], pending[position + 1 :]

        written: dict[str, Any] = {}
        for name, value in values.items():
            owner = next((c for c in newer if name in c.fields), None)
            if owner is not None:
                owner.previous[name] = value
            elif confirmed and any(name in c.fields for c in older):
                continue
            else:
                written[name] = value
        if written:
            self._replace(task_id, lambda t: t.model_copy(update=written))

        if change in pending:
            pending.remove(change)
        if not pending:
            self._pending.pop(task_id, None)

    async def _patch(self, operation: str, task_id: str, patch: TaskPatch) -> OperationResult:
        try:
            task = self._require_task(task_id)
        except TaskStoreError as e:
            return self._fail(operation, e)

        changes = patch.changes()
        if not changes:
            return OperationResult(success=True, task=task)

        change = _PendingChange(fields=frozenset(changes))

        def apply() -> Rollback:
            current = self.get_task(task_id) or task
            change.previous = {name: getattr(current, name) for name in changes}
            self._pending.setdefault(task_id, []).append(change)
            self._replace(task_id, lambda t: t.model_copy(update=changes))

            def rollback() -> None:
                self._settle(task_id, change, change.previous)

            return rollback

        outcome = await run_optimistic(
            name=f"{operation} task {task_id}",
            apply=apply,
            attempt=lambda: self._store.update_task(task_id, patch),
        )
        if not outcome.succeeded:
            return self._fail(operation, outcome.error)

        record = outcome.result
        merged: dict[str, Any] = {}
        if record is not None:
            merged = {name: getattr(record, name) for name in record.model_fields_set if name != "id"}
        self._settle(task_id, change, merged, confirmed=True)

        return OperationResult(success=True, task=self.get_task(task_id))

    def _fail(self, operation: str, error: TaskStoreError | None) -> OperationResult:
        """Surface a failed operation; rejected credentials are invalidated."""
        if error is None:
            error = TaskStoreError(f"{operation} failed")
        if isinstance(error, TaskStoreAuthError):
            self._credentials.invalidate()

        response = classify_error(error)
        self.error = response
        log_with_context(
            logger,
            "warning",
            f"Task operation {operation} failed: {error}",
            operation=operation,
            error_code=response.code,
        )
        return OperationResult(success=False, error=response)
