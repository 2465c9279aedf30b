"""Pydantic models for creating tasks in the task store."""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator

from taskboard.core.config import constants
from taskboard.domain.task import Attachment, Category, Priority, coerce_date, coerce_priority


def validate_title(v: str) -> str:
    """Strip a title and reject it when empty or too long."""
    title = v.strip()
    if not title:
        msg = "Title is required"
        raise ValueError(msg)
    if len(title) > constants.TITLE_MAX_LENGTH:
        msg = f"Title must be at most {constants.TITLE_MAX_LENGTH} characters"
        raise ValueError(msg)
    return title


def validate_description(v: str) -> str:
    """Reject descriptions longer than the task store accepts."""
    if len(v) > constants.DESCRIPTION_MAX_LENGTH:
        msg = f"Description must be at most {constants.DESCRIPTION_MAX_LENGTH} characters"
        raise ValueError(msg)
    return v


class TaskDraft(BaseModel):
    """Pydantic model for a task that has not been created yet."""

    title: str = Field(..., description="Task title (required, non-empty)")
    description: str = Field(default="", description="Detailed task description")
    category: Category = Field(default=Category.PERSONAL, description="Task category")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority")
    due_date: date | None = Field(default=None, description="Optional due date")
    attachments: list[Attachment] = Field(default_factory=list, description="Attached files in order")

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return validate_title(v)

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str) -> str:
        return validate_description(v)

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v: Any) -> Any:
        return Priority.MEDIUM if v is None else coerce_priority(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, v: Any) -> Any:
        return coerce_date(v)
