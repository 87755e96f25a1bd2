"""Day view: all-day strip plus the laned timed grid for one date."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Iterable, List, Optional

from ..dates import to_date_key
from ..grid import DEFAULT_GRID, TimeGridModel
from ..models import CalendarEntry
from ..overlap import assign_lanes
from ..positioning import PositionedEntry, position_entry
from ..snapshot import CalendarSnapshot


@dataclass(frozen=True)
class DayView:
    date: date
    date_key: str
    is_today: bool
    all_day_strip: tuple[CalendarEntry, ...]
    timed_grid: tuple[PositionedEntry, ...]
    grid: TimeGridModel
    unscheduled: tuple[CalendarEntry, ...] = ()
    tz: tzinfo | None = None

    def to_dict(self) -> dict:
        return {
            "view": "day",
            "date": self.date_key,
            "isToday": self.is_today,
            "allDayStrip": [entry.to_dict() for entry in self.all_day_strip],
            "timedGrid": [item.to_dict() for item in self.timed_grid],
            "gridConfig": self.grid.to_dict(),
            "unscheduled": [entry.to_dict() for entry in self.unscheduled],
        }


def day_view_from_snapshot(
    day: date,
    snapshot: CalendarSnapshot,
    *,
    grid: Optional[TimeGridModel] = None,
    now: Optional[datetime] = None,
) -> DayView:
    """Build the day view for ``day`` from a snapshot's memoized buckets."""

    grid = grid or DEFAULT_GRID
    tz = snapshot.tz
    now = now or datetime.now(tz)
    key = day.isoformat()

    all_day: List[CalendarEntry] = []
    timed: List[PositionedEntry] = []
    for event in snapshot.events_on(key):
        if event.is_all_day:
            all_day.append(event)
            continue
        positioned = position_entry(event, grid, day=day, tz=tz)
        if positioned is not None:
            timed.append(positioned)
    # Tasks have no time of day and never enter the timed grid.
    all_day.extend(snapshot.tasks_on(key))

    return DayView(
        date=day,
        date_key=key,
        is_today=to_date_key(now, tz) == key,
        all_day_strip=tuple(all_day),
        timed_grid=assign_lanes(timed),
        grid=grid,
        unscheduled=snapshot.unscheduled,
        tz=tz,
    )


def assemble_day_view(
    day: date,
    events: Iterable[CalendarEntry],
    tasks: Iterable[CalendarEntry],
    *,
    grid: Optional[TimeGridModel] = None,
    now: Optional[datetime] = None,
    tz: tzinfo | None = None,
) -> DayView:
    """Compose the all-day strip and timed grid for ``day``.

    Args:
        day: Local calendar date to show.
        events: Event entries; all-day ones go to the strip, the rest are
            positioned and laned on the grid.
        tasks: Task entries, placed in the strip by due date.
        grid: Visible window and slot size. Defaults to 7 AM - 9 PM in 30
            minute slots.
        now: Reference time for ``is_today``. Read from the clock when omitted.
        tz: Viewer timezone. :data:`None` uses the system zone.
    """

    snapshot = CalendarSnapshot.from_entries(events, tasks, tz=tz)
    return day_view_from_snapshot(day, snapshot, grid=grid, now=now)


__all__ = ["DayView", "assemble_day_view", "day_view_from_snapshot"]
