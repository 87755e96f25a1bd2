"""Immutable event/task snapshots with memoized date buckets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from functools import cached_property
from typing import Dict, Iterable, List, Mapping, Optional

from .dates import DateKey, bucket_by_date_key, event_date_key, task_date_key
from .models import CalendarEntry, EntryKind, entries_from_records


@dataclass(frozen=True)
class CalendarSnapshot:
    """One atomic view of the events and tasks handed to the engine.

    The date buckets are computed once per instance, so a day view and a month
    view built from the same snapshot share a single bucketing pass. A new
    snapshot must be built whenever the source collections change.
    """

    events: tuple[CalendarEntry, ...] = ()
    tasks: tuple[CalendarEntry, ...] = ()
    tz: Optional[tzinfo] = None

    @classmethod
    def from_entries(
        cls,
        events: Iterable[CalendarEntry] = (),
        tasks: Iterable[CalendarEntry] = (),
        *,
        tz: Optional[tzinfo] = None,
    ) -> "CalendarSnapshot":
        return cls(events=tuple(events), tasks=tuple(tasks), tz=tz)

    @classmethod
    def from_records(
        cls,
        *,
        events: Iterable[object] = (),
        tasks: Iterable[object] = (),
        tz: Optional[tzinfo] = None,
    ) -> "CalendarSnapshot":
        """Normalize raw record-store payloads into a snapshot."""

        return cls(
            events=tuple(entries_from_records(events, EntryKind.EVENT, tz)),
            tasks=tuple(entries_from_records(tasks, EntryKind.TASK, tz)),
            tz=tz,
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object], *, tz: Optional[tzinfo] = None) -> "CalendarSnapshot":
        events = payload.get("events") or []
        tasks = payload.get("tasks") or []
        return cls.from_records(
            events=events if isinstance(events, list) else [],
            tasks=tasks if isinstance(tasks, list) else [],
            tz=tz,
        )

    @cached_property
    def events_by_date(self) -> Dict[DateKey, List[CalendarEntry]]:
        return bucket_by_date_key(self.events, lambda entry: event_date_key(entry, self.tz))

    @cached_property
    def tasks_by_date(self) -> Dict[DateKey, List[CalendarEntry]]:
        return bucket_by_date_key(self.tasks, lambda entry: task_date_key(entry, self.tz))

    @cached_property
    def unscheduled(self) -> tuple[CalendarEntry, ...]:
        """Entries without a usable date, kept for list-style affordances."""

        return tuple(
            entry
            for entry in (*self.events, *self.tasks)
            if (event_date_key(entry, self.tz) if entry.is_event else task_date_key(entry, self.tz)) is None
        )

    def events_on(self, key: DateKey) -> tuple[CalendarEntry, ...]:
        return tuple(self.events_by_date.get(key, ()))

    def tasks_on(self, key: DateKey) -> tuple[CalendarEntry, ...]:
        return tuple(self.tasks_by_date.get(key, ()))


__all__ = ["CalendarSnapshot"]
