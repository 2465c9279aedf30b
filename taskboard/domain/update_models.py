"""Update models for partial task changes."""

from datetime import date
from typing import Any

from pydantic import BaseModel, field_validator

from taskboard.domain.create_models import validate_description, validate_title
from taskboard.domain.task import Attachment, Category, Priority, coerce_date, coerce_priority


class TaskPatch(BaseModel):
    """Partial update for a task. Only fields that were set are applied."""

    title: str | None = None
    description: str | None = None
    category: Category | None = None
    priority: Priority | None = None
    completed: bool | None = None
    due_date: date | None = None
    attachments: list[Attachment] | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str | None:
        if v is None:
            msg = "Title is required"
            raise ValueError(msg)
        return validate_title(v)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str | None) -> str | None:
        return "" if v is None else validate_description(v)

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v: Any) -> Any:
        return coerce_priority(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, v: Any) -> Any:
        return coerce_date(v)

    def changes(self) -> dict[str, Any]:
        """Return the explicitly set fields, keeping model values (not dumps).

        An explicit None clears due_date and priority; for the remaining fields
        it means "leave unchanged".
        """
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None or name in _CLEARABLE_FIELDS
        }


_CLEARABLE_FIELDS = frozenset({"due_date", "priority"})
