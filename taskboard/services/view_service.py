"""Pure view derivation: filtering and ordering of the task collection."""

from collections.abc import Sequence

from taskboard.domain.filters import FilterState, StatusFilter
from taskboard.domain.task import Category, Task, priority_rank


def matches_search(task: Task, query: str) -> bool:
    """Case-insensitive substring match on title or description."""
    needle = query.lower()
    if not needle:
        return True
    return needle in task.title.lower() or (bool(task.description) and needle in task.description.lower())


def matches_status(task: Task, status: StatusFilter) -> bool:
    if status == StatusFilter.ACTIVE:
        return not task.completed
    if status == StatusFilter.COMPLETED:
        return task.completed
    return True


def matches_category(task: Task, category: Category | None) -> bool:
    return category is None or task.category == category


def filter_tasks(tasks: Sequence[Task], filter_state: FilterState) -> list[Task]:
    """Apply search, status and category filters in that order."""
    return [
        task
        for task in tasks
        if matches_search(task, filter_state.search)
        and matches_status(task, filter_state.status)
        and matches_category(task, filter_state.category)
    ]


def _priority_sort_key(task: Task) -> tuple[int, float]:
    # Undated tasks go after dated ones of the same priority
    created = -task.created_at.timestamp() if task.created_at else float("inf")
    return (-priority_rank(task.priority), created)


def sort_by_priority(tasks: Sequence[Task]) -> list[Task]:
    """Order by priority (High first), then newest first.

    sorted() is stable, so tasks with equal keys keep their input order.
    """
    return sorted(tasks, key=_priority_sort_key)


def derive_view(tasks: Sequence[Task], filter_state: FilterState) -> list[Task]:
    """Compute the visible task list without touching the collection.

    Args:
        tasks: The full task collection
        filter_state: Current search, status, category and ordering choices

    Returns:
        A new list with the matching tasks in display order
    """
    visible = filter_tasks(tasks, filter_state)
    if filter_state.sort_by_priority:
        return sort_by_priority(visible)
    return visible


def active_count(tasks: Sequence[Task]) -> int:
    """Number of tasks that are not completed."""
    return sum(1 for task in tasks if not task.completed)


def category_counts(tasks: Sequence[Task]) -> dict[Category, int]:
    """Number of tasks per category, including empty categories."""
    counts = dict.fromkeys(Category, 0)
    for task in tasks:
        counts[task.category] += 1
    return counts
