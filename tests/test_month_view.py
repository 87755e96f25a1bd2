from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from practice_calendar.dates import days_in_month, first_weekday
from practice_calendar.models import CalendarEntry, EntryKind
from practice_calendar.views.month import WEEKDAY_HEADER, build_month_grid

NOW = datetime(2024, 2, 14, 9, 0)


def _event(entry_id: str, start: datetime, *, all_day: bool = False) -> CalendarEntry:
    return CalendarEntry(id=entry_id, kind=EntryKind.EVENT, title=entry_id, start=start, is_all_day=all_day)


def _task(entry_id: str, due: date | None) -> CalendarEntry:
    return CalendarEntry(id=entry_id, kind=EntryKind.TASK, title=entry_id, due_date=due)


def test_february_2024_layout() -> None:
    view = build_month_grid(date(2024, 2, 10), [], [], now=NOW)

    assert view.leading_blanks == 4
    assert view.days_in_month == 29
    assert len(view.cells) == 33
    assert [len(week) for week in view.weeks] == [7, 7, 7, 7, 5]
    assert view.weeks[0][:4] == (None, None, None, None)
    assert view.weeks[0][4].date == date(2024, 2, 1)
    assert view.weeks[-1][-1].date == date(2024, 2, 29)


def test_month_starting_on_sunday_has_no_blanks() -> None:
    view = build_month_grid(date(2024, 9, 1), [], [], now=NOW)

    assert view.leading_blanks == 0
    assert view.weeks[0][0].date == date(2024, 9, 1)


@pytest.mark.parametrize("month", range(1, 13))
def test_cell_count_is_blanks_plus_days(month: int) -> None:
    view = build_month_grid(date(2025, month, 1), [], [], now=NOW)

    assert len(view.cells) == first_weekday(2025, month) + days_in_month(2025, month)
    assert all(cell.is_current_month for cell in view.day_cells)


def test_exactly_one_today_cell_in_current_month() -> None:
    view = build_month_grid(date(2024, 2, 1), [], [], now=NOW)

    today_cells = [cell for cell in view.day_cells if cell.is_today]
    assert [cell.date_key for cell in today_cells] == ["2024-02-14"]


def test_no_today_cell_outside_current_month() -> None:
    view = build_month_grid(date(2024, 3, 1), [], [], now=NOW)

    assert not any(cell.is_today for cell in view.day_cells)


def test_any_anchor_in_month_gives_same_grid() -> None:
    assert build_month_grid(date(2024, 2, 1), [], [], now=NOW) == build_month_grid(
        date(2024, 2, 29), [], [], now=NOW
    )


def test_entries_are_bucketed_into_cells() -> None:
    events = [
        _event("hearing", datetime(2024, 2, 10, 9)),
        _event("filing", datetime(2024, 2, 10), all_day=True),
        _event("march", datetime(2024, 3, 1, 9)),
        _event("meeting", datetime(2024, 2, 10, 15)),
    ]
    tasks = [_task("brief", date(2024, 2, 10)), _task("undated", None)]

    view = build_month_grid(date(2024, 2, 1), events, tasks, now=NOW)

    cell = next(cell for cell in view.day_cells if cell.date_key == "2024-02-10")
    assert [entry.id for entry in cell.all_day_entries] == ["filing", "brief"]
    assert [entry.id for entry in cell.timed_entries] == ["hearing", "meeting"]
    placed = [entry.id for cell in view.day_cells for entry in (*cell.all_day_entries, *cell.timed_entries)]
    assert sorted(placed) == ["brief", "filing", "hearing", "meeting"]
    assert [entry.id for entry in view.unscheduled] == ["undated"]


def test_weekday_header_and_serialization() -> None:
    view = build_month_grid(date(2024, 2, 1), [], [], now=NOW)
    payload = view.to_dict()

    assert WEEKDAY_HEADER == ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
    assert payload["weekdayHeader"] == list(WEEKDAY_HEADER)
    assert payload["weeks"][0][:4] == [None, None, None, None]
    assert payload["weeks"][0][4]["date"] == "2024-02-01"


def test_late_evening_utc_instant_lands_in_local_cell() -> None:
    tz = ZoneInfo("America/New_York")
    late = _event("late", datetime(2024, 3, 16, 2, 0, tzinfo=timezone.utc))

    view = build_month_grid(date(2024, 3, 1), [late], [], now=NOW, tz=tz)

    cells = {cell.date: cell for cell in view.day_cells}
    assert [entry.id for entry in cells[date(2024, 3, 15)].timed_entries] == ["late"]
    assert cells[date(2024, 3, 16)].timed_entries == ()
