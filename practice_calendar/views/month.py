"""Month view: a Sunday-first week matrix of day cells."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Final, Iterable, List, Optional

from ..dates import days_in_month, first_weekday, to_date_key
from ..models import CalendarEntry
from ..snapshot import CalendarSnapshot

WEEKDAY_HEADER: Final[tuple[str, ...]] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
DAYS_PER_WEEK: Final[int] = 7


@dataclass(frozen=True)
class MonthCell:
    date: date
    date_key: str
    is_current_month: bool
    is_today: bool
    all_day_entries: tuple[CalendarEntry, ...] = ()
    timed_entries: tuple[CalendarEntry, ...] = ()

    @property
    def day_number(self) -> int:
        return self.date.day

    def to_dict(self) -> dict:
        return {
            "date": self.date_key,
            "isCurrentMonth": self.is_current_month,
            "isToday": self.is_today,
            "allDayEntries": [entry.to_dict() for entry in self.all_day_entries],
            "timedEntries": [entry.to_dict() for entry in self.timed_entries],
        }


@dataclass(frozen=True)
class MonthView:
    year: int
    month: int
    leading_blanks: int
    days_in_month: int
    weeks: tuple[tuple[Optional[MonthCell], ...], ...]
    unscheduled: tuple[CalendarEntry, ...] = ()
    weekday_header: tuple[str, ...] = WEEKDAY_HEADER

    @property
    def cells(self) -> tuple[Optional[MonthCell], ...]:
        return tuple(cell for week in self.weeks for cell in week)

    @property
    def day_cells(self) -> tuple[MonthCell, ...]:
        return tuple(cell for cell in self.cells if cell is not None)

    def to_dict(self) -> dict:
        return {
            "view": "month",
            "year": self.year,
            "month": self.month,
            "weekdayHeader": list(self.weekday_header),
            "leadingBlanks": self.leading_blanks,
            "daysInMonth": self.days_in_month,
            "weeks": [
                [cell.to_dict() if cell is not None else None for cell in week]
                for week in self.weeks
            ],
            "unscheduled": [entry.to_dict() for entry in self.unscheduled],
        }


def _chunk_weeks(cells: List[Optional[MonthCell]]) -> tuple[tuple[Optional[MonthCell], ...], ...]:
    return tuple(
        tuple(cells[index:index + DAYS_PER_WEEK])
        for index in range(0, len(cells), DAYS_PER_WEEK)
    )


def month_grid_from_snapshot(
    anchor: date,
    snapshot: CalendarSnapshot,
    *,
    now: Optional[datetime] = None,
) -> MonthView:
    """Build the month containing ``anchor`` from a snapshot's memoized buckets."""

    tz = snapshot.tz
    now = now or datetime.now(tz)
    today_key = to_date_key(now, tz)

    year, month = anchor.year, anchor.month
    blanks = first_weekday(year, month)
    total_days = days_in_month(year, month)

    cells: List[Optional[MonthCell]] = [None] * blanks
    for day_number in range(1, total_days + 1):
        day = date(year, month, day_number)
        key = day.isoformat()
        events = snapshot.events_on(key)
        all_day = [event for event in events if event.is_all_day]
        all_day.extend(snapshot.tasks_on(key))
        cells.append(
            MonthCell(
                date=day,
                date_key=key,
                is_current_month=True,
                is_today=key == today_key,
                all_day_entries=tuple(all_day),
                timed_entries=tuple(event for event in events if not event.is_all_day),
            )
        )

    return MonthView(
        year=year,
        month=month,
        leading_blanks=blanks,
        days_in_month=total_days,
        weeks=_chunk_weeks(cells),
        unscheduled=snapshot.unscheduled,
    )


def build_month_grid(
    anchor: date,
    events: Iterable[CalendarEntry],
    tasks: Iterable[CalendarEntry],
    *,
    now: Optional[datetime] = None,
    tz: tzinfo | None = None,
) -> MonthView:
    """Lay out the month containing ``anchor`` with events and tasks bucketed per day.

    Rows wrap every seven cells; the first row opens with ``None`` placeholders
    up to the weekday of the 1st and the last row is left short.
    """

    snapshot = CalendarSnapshot.from_entries(events, tasks, tz=tz)
    return month_grid_from_snapshot(anchor, snapshot, now=now)


__all__ = [
    "DAYS_PER_WEEK",
    "MonthCell",
    "MonthView",
    "WEEKDAY_HEADER",
    "build_month_grid",
    "month_grid_from_snapshot",
]
