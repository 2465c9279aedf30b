"""View filter state for deriving task lists."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from taskboard.domain.task import Category


class StatusFilter(StrEnum):
    """Completion status filter."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class ViewMode(StrEnum):
    """How the presentation layer shows the derived tasks."""

    LIST = "list"
    CALENDAR = "calendar"


ALL_CATEGORIES = "all"


class FilterState(BaseModel):
    """Session-scoped filter state; never persisted."""

    search: str = Field(default="", description="Free-text search over title and description")
    status: StatusFilter = Field(default=StatusFilter.ALL, description="Completion status filter")
    category: Category | None = Field(default=None, description="Category filter (None means all)")
    view_mode: ViewMode = Field(default=ViewMode.LIST, description="List or calendar view")
    sort_by_priority: bool = Field(default=False, description="Order by priority, then newest first")

    @field_validator("category", mode="before")
    @classmethod
    def parse_all_categories(cls, v: Any) -> Any:
        """Treat "all" (any casing) and empty values as no category constraint."""
        if v is None or (isinstance(v, str) and v.strip().lower() in ("", ALL_CATEGORIES)):
            return None
        return v
