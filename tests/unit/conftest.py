"""Pytest configuration and fixtures for unit tests."""

from datetime import UTC, date, datetime

import pytest

from taskboard.core.credentials import InMemoryCredentialStore
from taskboard.domain.task import Category, Priority, Task
from taskboard.services.task_controller import TaskViewController
from tests.unit.mocks import InMemoryTaskStore, make_task


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    """Provides a fresh InMemoryTaskStore for each test."""
    return InMemoryTaskStore()


@pytest.fixture
def credentials() -> InMemoryCredentialStore:
    return InMemoryCredentialStore("test-token")


@pytest.fixture
def sample_tasks() -> list[Task]:
    """Three tasks across two categories, one completed."""
    return [
        make_task(
            "1",
            "Buy Milk",
            description="Semi-skimmed",
            category=Category.SHOPPING,
            priority=Priority.LOW,
            created_at=datetime(2024, 3, 1, 9, 0, tzinfo=UTC),
        ),
        make_task(
            "2",
            "Write report",
            description="Quarterly numbers",
            category=Category.WORK,
            priority=Priority.HIGH,
            completed=True,
            created_at=datetime(2024, 3, 2, 9, 0, tzinfo=UTC),
            due_date=date(2024, 3, 9),
        ),
        make_task(
            "3",
            "Call mom",
            category=Category.PERSONAL,
            created_at=datetime(2024, 3, 3, 9, 0, tzinfo=UTC),
        ),
    ]


@pytest.fixture
async def controller(task_store, credentials, sample_tasks) -> TaskViewController:
    """Controller loaded with the sample tasks."""
    task_store.seed(*sample_tasks)
    ctrl = TaskViewController(store=task_store, credentials=credentials)
    await ctrl.load()
    task_store.calls.clear()
    return ctrl
