"""Calendar grid models."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field

from taskboard.domain.task import Task


class MarkerKind(StrEnum):
    """Why a task appears in a day cell."""

    START = "start"  # Day the task was created
    DUE = "due"  # Day the task is due


class CalendarMarker(BaseModel):
    """A task shown in a day cell."""

    kind: MarkerKind
    task: Task


class DayCell(BaseModel):
    """One day of the month grid."""

    day: date = Field(..., description="Calendar date of the cell")
    in_month: bool = Field(..., description="False for days that only pad the grid")
    markers: list[CalendarMarker] = Field(default_factory=list, description="Markers in task order")


class CalendarMonth(BaseModel):
    """Month grid made of full weeks starting on Sunday."""

    year: int
    month: int
    weeks: list[list[DayCell]] = Field(default_factory=list)

    def cell(self, day: date) -> DayCell | None:
        """Return the cell for a date, or None when the grid does not show it."""
        for week in self.weeks:
            for cell in week:
                if cell.day == day:
                    return cell
        return None
