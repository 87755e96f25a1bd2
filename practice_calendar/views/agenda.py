"""Agenda for the "My Day" dashboard: today's events and tasks needing attention."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Dict, Optional

from ..dates import DateKey, bucket_by_date_key, task_date_key, to_date_key, to_local
from ..models import CalendarEntry, TaskPriority
from ..snapshot import CalendarSnapshot


@dataclass(frozen=True)
class AgendaView:
    date_key: str
    events_today: tuple[CalendarEntry, ...]
    urgent_tasks: tuple[CalendarEntry, ...]
    open_tasks_by_due_date: Dict[DateKey, tuple[CalendarEntry, ...]]

    def to_dict(self) -> dict:
        return {
            "view": "agenda",
            "date": self.date_key,
            "eventsToday": [entry.to_dict() for entry in self.events_today],
            "urgentTasks": [entry.to_dict() for entry in self.urgent_tasks],
            "openTasksByDueDate": {
                key: [entry.to_dict() for entry in entries]
                for key, entries in self.open_tasks_by_due_date.items()
            },
        }


def _priority_rank(entry: CalendarEntry) -> int:
    return (entry.priority or TaskPriority.LOW).rank


def _is_due_by(task: CalendarEntry, today_key: DateKey, tz: Optional[tzinfo]) -> bool:
    key = task_date_key(task, tz)
    # ISO date keys compare chronologically as strings.
    return key is not None and key <= today_key


def build_agenda(snapshot: CalendarSnapshot, *, now: Optional[datetime] = None) -> AgendaView:
    """Collect today's events in start order and the open tasks due by today."""

    tz = snapshot.tz
    now = now or datetime.now(tz)
    today_key = to_date_key(now, tz)

    events_today = sorted(
        snapshot.events_on(today_key),
        key=lambda entry: to_local(entry.start, tz).replace(tzinfo=None),
    )

    open_tasks = [task for task in snapshot.tasks if not task.is_done]
    urgent = [task for task in open_tasks if _is_due_by(task, today_key, tz)]
    urgent.sort(key=_priority_rank)

    grouped = bucket_by_date_key(open_tasks, lambda task: task_date_key(task, tz), include_undated=True)

    return AgendaView(
        date_key=today_key,
        events_today=tuple(events_today),
        urgent_tasks=tuple(urgent),
        open_tasks_by_due_date={key: tuple(entries) for key, entries in grouped.items()},
    )


__all__ = ["AgendaView", "build_agenda"]
