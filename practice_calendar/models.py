"""Normalized calendar entries and conversion from raw record-store payloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Sequence

from .dates import parse_date, parse_instant, to_local

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    EVENT = "event"
    TASK = "task"


class EventType(str, Enum):
    COURT_HEARING = "Court Hearing"
    CLIENT_MEETING = "Client Meeting"
    DEPOSITION = "Deposition"
    FILING_DEADLINE = "Filing Deadline"
    MISC = "Misc"

    @property
    def css_class(self) -> str:
        return "event-type-" + self.value.lower().replace(" ", "-")


class TaskPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {TaskPriority.HIGH: 1, TaskPriority.MEDIUM: 2, TaskPriority.LOW: 3}

TASK_STATUS_DONE = "Done"


@dataclass(frozen=True)
class CalendarEntry:
    """Immutable snapshot of an event or a task as seen by the calendar."""

    id: str
    kind: EntryKind
    title: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    due_date: Optional[date] = None
    is_all_day: bool = False
    event_type: Optional[EventType] = None
    priority: Optional[TaskPriority] = None
    status: Optional[str] = None
    matter_label: Optional[str] = None
    location: Optional[str] = None

    @property
    def is_event(self) -> bool:
        return self.kind is EntryKind.EVENT

    @property
    def is_task(self) -> bool:
        return self.kind is EntryKind.TASK

    @property
    def is_done(self) -> bool:
        return self.status == TASK_STATUS_DONE

    @property
    def is_dated(self) -> bool:
        return (self.start if self.is_event else self.due_date) is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "title": self.title,
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "isAllDay": self.is_all_day,
            "type": self.event_type.value if self.event_type else None,
            "priority": self.priority.value if self.priority else None,
            "status": self.status,
            "matterLabel": self.matter_label,
            "location": self.location,
        }


# ---------------------------------------------------------------------------
# Record normalization
# ---------------------------------------------------------------------------

# Record-store column names first, then the flat interface names.
_EVENT_FIELDS = {
    "title": ("Subject", "subject", "title"),
    "start": ("Start Time", "startInstant", "start"),
    "end": ("End Time", "endInstant", "end"),
    "all_day": ("All Day", "isAllDay", "allDay"),
    "type": ("Type", "type"),
    "matter": ("Matter Name (from Matter)", "matterLabel", "matter"),
    "location": ("Location", "location"),
}

_TASK_FIELDS = {
    "title": ("Task Name", "name", "title"),
    "due": ("Due Date", "dueDate", "due"),
    "priority": ("Priority", "priority"),
    "status": ("Status", "status"),
    "matter": ("Matter Name (from Matter)", "matterLabel", "matter"),
}


def _fields(record: Mapping[str, object]) -> Mapping[str, object]:
    inner = record.get("fields")
    return inner if isinstance(inner, Mapping) else record


def _lookup(fields: Mapping[str, object], names: Sequence[str]) -> object:
    for name in names:
        if name in fields and fields[name] is not None:
            return fields[name]
    return None


def _text(value: object) -> Optional[str]:
    # Lookup columns arrive as single-element lists.
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    return bool(value)


def _event_type(value: object) -> EventType:
    text = _text(value)
    for candidate in EventType:
        if text is not None and text.lower() == candidate.value.lower():
            return candidate
    return EventType.MISC


def _priority(value: object) -> Optional[TaskPriority]:
    text = _text(value)
    for candidate in TaskPriority:
        if text is not None and text.lower() == candidate.value.lower():
            return candidate
    return None


def _localized(value: Optional[datetime], tz: tzinfo | None) -> Optional[datetime]:
    if value is None or tz is None or value.tzinfo is None:
        return value
    return to_local(value, tz)


def entry_from_event_record(record: Mapping[str, object], tz: tzinfo | None = None) -> CalendarEntry:
    """Normalize an event record. Unparsable instants become :data:`None`."""

    fields = _fields(record)
    raw_start = _lookup(fields, _EVENT_FIELDS["start"])
    raw_end = _lookup(fields, _EVENT_FIELDS["end"])
    start = _localized(parse_instant(raw_start), tz)
    end = _localized(parse_instant(raw_end), tz)
    if start is None and raw_start is not None:
        logger.debug("Event %s has an unreadable start %r", record.get("id"), raw_start)
    if end is None and raw_end is not None:
        logger.debug("Event %s has an unreadable end %r", record.get("id"), raw_end)

    return CalendarEntry(
        id=str(record.get("id") or ""),
        kind=EntryKind.EVENT,
        title=_text(_lookup(fields, _EVENT_FIELDS["title"])) or "Untitled Event",
        start=start,
        end=end,
        is_all_day=_flag(_lookup(fields, _EVENT_FIELDS["all_day"])),
        event_type=_event_type(_lookup(fields, _EVENT_FIELDS["type"])),
        matter_label=_text(_lookup(fields, _EVENT_FIELDS["matter"])),
        location=_text(_lookup(fields, _EVENT_FIELDS["location"])),
    )


def entry_from_task_record(record: Mapping[str, object], tz: tzinfo | None = None) -> CalendarEntry:
    """Normalize a task record. Tasks carry a date-only due date and no time."""

    fields = _fields(record)
    raw_due = _lookup(fields, _TASK_FIELDS["due"])
    due_date = parse_date(raw_due, tz)
    if due_date is None and raw_due is not None:
        logger.debug("Task %s has an unreadable due date %r", record.get("id"), raw_due)

    return CalendarEntry(
        id=str(record.get("id") or ""),
        kind=EntryKind.TASK,
        title=_text(_lookup(fields, _TASK_FIELDS["title"])) or "Untitled Task",
        due_date=due_date,
        priority=_priority(_lookup(fields, _TASK_FIELDS["priority"])),
        status=_text(_lookup(fields, _TASK_FIELDS["status"])),
        matter_label=_text(_lookup(fields, _TASK_FIELDS["matter"])),
    )


def entries_from_records(
    records: Iterable[object],
    kind: EntryKind,
    tz: tzinfo | None = None,
) -> List[CalendarEntry]:
    """Normalize a batch of records, skipping anything that is not a mapping."""

    convert = entry_from_event_record if kind is EntryKind.EVENT else entry_from_task_record
    normalized: List[CalendarEntry] = []
    for record in records:
        if isinstance(record, CalendarEntry):
            normalized.append(record)
            continue
        if not isinstance(record, Mapping):
            logger.warning("Skipping %s record of unexpected type %s", kind.value, type(record).__name__)
            continue
        normalized.append(convert(record, tz))
    return normalized


__all__ = [
    "CalendarEntry",
    "EntryKind",
    "EventType",
    "TASK_STATUS_DONE",
    "TaskPriority",
    "entries_from_records",
    "entry_from_event_record",
    "entry_from_task_record",
]
