"""Task domain models and enums."""

import logging
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)


class Category(StrEnum):
    """Fixed set of task categories."""

    PERSONAL = "Personal"
    WORK = "Work"
    STUDY = "Study"
    SHOPPING = "Shopping"
    OTHERS = "Others"


class Priority(StrEnum):
    """Task priority."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Higher rank sorts first; tasks without a priority rank as Medium
PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def priority_rank(priority: Priority | None) -> int:
    """Return the ordering rank of a priority, treating a missing one as Medium."""
    return PRIORITY_RANK[priority or Priority.MEDIUM]


def coerce_priority(value: Any) -> Any:
    """Accept priorities in any casing ("high", "HIGH", "High")."""
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        for priority in Priority:
            if priority.value.lower() == stripped.lower():
                return priority
    return value


def coerce_date(value: Any) -> Any:
    """Reduce an ISO datetime string to its calendar date part."""
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        if "T" in stripped:
            return stripped.split("T", 1)[0]
        return stripped
    if isinstance(value, datetime):
        return value.date()
    return value


class Attachment(BaseModel):
    """File attached to a task."""

    name: str = Field(..., description="File name")
    url: str = Field(..., description="Download URL")
    media_type: str = Field(default="application/octet-stream", description="MIME type of the file")


class Task(BaseModel):
    """Task record as acknowledged by the task store."""

    id: str | None = Field(default=None, description="Task ID assigned by the task store")
    title: str = Field(..., description="Task title")
    description: str = Field(default="", description="Detailed task description")
    category: Category = Field(default=Category.PERSONAL, description="Task category")
    priority: Priority | None = Field(default=None, description="Task priority (None ranks as Medium)")
    completed: bool = Field(default=False, description="Whether the task is done")
    due_date: date | None = Field(default=None, description="Optional due date")
    created_at: datetime | None = Field(default=None, description="Creation timestamp from the task store")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp from the task store")
    attachments: list[Attachment] = Field(default_factory=list, description="Attached files in order")

    @field_validator("id", mode="before")
    @classmethod
    def convert_id(cls, v: Any) -> Any:
        """Task stores may hand out integer IDs; keep them as opaque strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Any:
        """Map missing categories to Personal and unknown ones to Others."""
        if v is None or v == "":
            return Category.PERSONAL
        if isinstance(v, str) and v not in {c.value for c in Category}:
            logger.warning("Unknown task category %r, filing under %s", v, Category.OTHERS)
            return Category.OTHERS
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v: Any) -> Any:
        return coerce_priority(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, v: Any) -> Any:
        return coerce_date(v)

    @field_validator("attachments", mode="before")
    @classmethod
    def default_attachments(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def is_persisted(self) -> bool:
        """True once the task store has assigned an identifier."""
        return bool(self.id)
