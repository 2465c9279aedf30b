"""Domain models and DTOs."""

from taskboard.domain.calendar import CalendarMarker, CalendarMonth, DayCell, MarkerKind
from taskboard.domain.create_models import TaskDraft
from taskboard.domain.filters import FilterState, StatusFilter, ViewMode
from taskboard.domain.task import Attachment, Category, Priority, Task
from taskboard.domain.update_models import TaskPatch


__all__ = [
    "Attachment",
    "CalendarMarker",
    "CalendarMonth",
    "Category",
    "DayCell",
    "FilterState",
    "MarkerKind",
    "Priority",
    "StatusFilter",
    "Task",
    "TaskDraft",
    "TaskPatch",
    "ViewMode",
]
