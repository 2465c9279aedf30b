"""Month grid construction and day binning for the calendar view."""

import calendar
from collections import defaultdict
from collections.abc import Sequence
from datetime import date

from taskboard.core.config import constants
from taskboard.domain.calendar import CalendarMarker, CalendarMonth, DayCell, MarkerKind
from taskboard.domain.task import Task


# Weeks start on Sunday
_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by delta months, e.g. -1 for the previous month."""
    index = year * constants.MONTHS_PER_YEAR + (month - 1) + delta
    new_year, month_index = divmod(index, constants.MONTHS_PER_YEAR)
    return new_year, month_index + 1


def weekday_labels() -> list[str]:
    """Abbreviated weekday names in grid column order."""
    return [calendar.day_abbr[weekday] for weekday in _CALENDAR.iterweekdays()]


def _markers_by_day(tasks: Sequence[Task]) -> dict[date, list[CalendarMarker]]:
    markers: dict[date, list[CalendarMarker]] = defaultdict(list)
    for task in tasks:
        if task.created_at is not None:
            # Date-only comparison in the timestamp's own offset
            markers[task.created_at.date()].append(CalendarMarker(kind=MarkerKind.START, task=task))
        if task.due_date is not None:
            markers[task.due_date].append(CalendarMarker(kind=MarkerKind.DUE, task=task))
    return markers


def build_month(tasks: Sequence[Task], *, year: int, month: int) -> CalendarMonth:
    """Bin tasks into the day cells of a month grid.

    Each task contributes a start marker on its created date and a due marker on
    its due date. Padding days from neighbouring months carry no markers.

    Raises:
        ValueError: If month is not in 1..12
    """
    if not 1 <= month <= constants.MONTHS_PER_YEAR:
        msg = f"Invalid month: {month}"
        raise ValueError(msg)

    markers = _markers_by_day(tasks)
    weeks = [
        [
            DayCell(
                day=day,
                in_month=day.month == month,
                markers=list(markers.get(day, [])) if day.month == month else [],
            )
            for day in week
        ]
        for week in _CALENDAR.monthdatescalendar(year, month)
    ]
    return CalendarMonth(year=year, month=month, weeks=weeks)
