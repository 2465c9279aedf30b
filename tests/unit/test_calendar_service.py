"""Tests for calendar grid construction and day binning."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from taskboard.domain.calendar import MarkerKind
from taskboard.services import calendar_service
from tests.unit.mocks import make_task


@pytest.mark.unit
class TestBuildMonth:
    """Binning tasks into day cells."""

    def test_start_and_due_markers(self):
        task = make_task("1", "Plan trip", created_at=datetime(2024, 3, 5, 14, 30, tzinfo=UTC), due_date=date(2024, 3, 9))

        month = calendar_service.build_month([task], year=2024, month=3)

        start_cell = month.cell(date(2024, 3, 5))
        due_cell = month.cell(date(2024, 3, 9))
        assert [(m.kind, m.task.id) for m in start_cell.markers] == [(MarkerKind.START, "1")]
        assert [(m.kind, m.task.id) for m in due_cell.markers] == [(MarkerKind.DUE, "1")]
        marked = [cell.day for week in month.weeks for cell in week if cell.markers]
        assert marked == [date(2024, 3, 5), date(2024, 3, 9)]

    def test_same_day_produces_two_markers(self):
        task = make_task("1", "Same day", created_at=datetime(2024, 3, 5, 8, tzinfo=UTC), due_date=date(2024, 3, 5))

        month = calendar_service.build_month([task], year=2024, month=3)

        kinds = [m.kind for m in month.cell(date(2024, 3, 5)).markers]
        assert kinds == [MarkerKind.START, MarkerKind.DUE]

    def test_time_of_day_is_ignored(self):
        offset = timezone(timedelta(hours=-8))
        task = make_task("1", "Late night", created_at=datetime(2024, 3, 5, 23, 59, tzinfo=offset))

        month = calendar_service.build_month([task], year=2024, month=3)

        assert len(month.cell(date(2024, 3, 5)).markers) == 1
        assert month.cell(date(2024, 3, 6)).markers == []

    def test_padding_days_carry_no_markers(self):
        # March 2024 starts on a Friday, so the grid begins on Sunday Feb 25
        task = make_task("1", "February task", created_at=datetime(2024, 2, 26, tzinfo=UTC))

        month = calendar_service.build_month([task], year=2024, month=3)

        padding = month.cell(date(2024, 2, 26))
        assert padding is not None
        assert padding.in_month is False
        assert padding.markers == []

    def test_grid_is_full_weeks_starting_sunday(self):
        month = calendar_service.build_month([], year=2024, month=3)

        assert month.weeks[0][0].day == date(2024, 2, 25)
        assert month.weeks[-1][-1].day == date(2024, 4, 6)
        assert all(len(week) == 7 for week in month.weeks)
        assert all(week[0].day.weekday() == 6 for week in month.weeks)
        in_month = [cell for week in month.weeks for cell in week if cell.in_month]
        assert len(in_month) == 31

    def test_tasks_outside_month_are_ignored(self):
        task = make_task("1", "Next year", created_at=datetime(2025, 3, 5, tzinfo=UTC))

        month = calendar_service.build_month([task], year=2024, month=3)

        assert all(not cell.markers for week in month.weeks for cell in week)

    def test_invalid_month(self):
        with pytest.raises(ValueError, match="Invalid month"):
            calendar_service.build_month([], year=2024, month=13)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("year", "month", "delta", "expected"),
    [
        (2024, 3, 1, (2024, 4)),
        (2024, 12, 1, (2025, 1)),
        (2024, 1, -1, (2023, 12)),
        (2024, 3, -15, (2022, 12)),
    ],
)
def test_shift_month(year, month, delta, expected):
    assert calendar_service.shift_month(year, month, delta) == expected


@pytest.mark.unit
def test_weekday_labels_start_on_sunday():
    labels = calendar_service.weekday_labels()

    assert len(labels) == 7
    assert labels[0] == "Sun"
    assert labels[-1] == "Sat"
