from __future__ import annotations

import logging
from datetime import date, datetime

import pytest
from zoneinfo import ZoneInfo

from practice_calendar.models import (
    CalendarEntry,
    EntryKind,
    EventType,
    TaskPriority,
    entries_from_records,
    entry_from_event_record,
    entry_from_task_record,
)


def test_event_record_from_record_store_shape() -> None:
    record = {
        "id": "recA",
        "fields": {
            "Subject": "Bail hearing",
            "Start Time": "2024-03-15T09:00:00",
            "End Time": "2024-03-15T10:00:00",
            "Type": "Court Hearing",
            "Matter Name (from Matter)": ["State v. Adeyemi"],
            "Location": "Courtroom 4",
        },
    }

    entry = entry_from_event_record(record)

    assert entry == CalendarEntry(
        id="recA",
        kind=EntryKind.EVENT,
        title="Bail hearing",
        start=datetime(2024, 3, 15, 9, 0),
        end=datetime(2024, 3, 15, 10, 0),
        is_all_day=False,
        event_type=EventType.COURT_HEARING,
        matter_label="State v. Adeyemi",
        location="Courtroom 4",
    )


def test_event_record_from_flat_shape() -> None:
    record = {
        "id": "evt-1",
        "subject": "Filing",
        "startInstant": "2024-03-15",
        "isAllDay": True,
        "type": "filing deadline",
        "matterLabel": "Estate of Bello",
    }

    entry = entry_from_event_record(record)

    assert entry.is_all_day is True
    assert entry.start == datetime(2024, 3, 15)
    assert entry.end is None
    assert entry.event_type is EventType.FILING_DEADLINE
    assert entry.matter_label == "Estate of Bello"


def test_event_record_with_bad_dates_keeps_entry_without_start() -> None:
    entry = entry_from_event_record({"id": "bad", "fields": {"Subject": "Broken", "Start Time": "soon"}})

    assert entry.start is None
    assert entry.is_dated is False
    assert entry.event_type is EventType.MISC


def test_event_record_localizes_aware_instants_when_timezone_given() -> None:
    lagos = ZoneInfo("Africa/Lagos")
    entry = entry_from_event_record(
        {"id": "tz", "fields": {"Subject": "Call", "Start Time": "2024-03-15T08:00:00Z"}},
        lagos,
    )

    assert entry.start == datetime(2024, 3, 15, 9, 0, tzinfo=lagos)


def test_task_record_normalization() -> None:
    entry = entry_from_task_record(
        {
            "id": "task-1",
            "fields": {
                "Task Name": "Draft brief",
                "Due Date": "2024-03-15",
                "Priority": "high",
                "Status": "To-Do",
            },
        }
    )

    assert entry.kind is EntryKind.TASK
    assert entry.due_date == date(2024, 3, 15)
    assert entry.priority is TaskPriority.HIGH
    assert entry.start is None
    assert entry.is_done is False


def test_task_record_without_due_date() -> None:
    entry = entry_from_task_record({"id": "task-2", "name": "Call client", "priority": "urgent"})

    assert entry.due_date is None
    assert entry.priority is None
    assert entry.title == "Call client"


def test_missing_titles_get_placeholders() -> None:
    assert entry_from_event_record({"id": "e", "fields": {}}).title == "Untitled Event"
    assert entry_from_task_record({"id": "t", "fields": {}}).title == "Untitled Task"


def test_entries_from_records_skips_non_mappings(caplog: pytest.LogCaptureFixture) -> None:
    existing = CalendarEntry(id="keep", kind=EntryKind.TASK, title="Already normalized")

    with caplog.at_level(logging.WARNING, logger="practice_calendar.models"):
        entries = entries_from_records(
            [{"id": "t1", "name": "Task"}, "garbage", existing],
            EntryKind.TASK,
        )

    assert [entry.id for entry in entries] == ["t1", "keep"]
    assert "unexpected type str" in caplog.text


def test_event_type_css_class() -> None:
    assert EventType.COURT_HEARING.css_class == "event-type-court-hearing"
    assert EventType.MISC.css_class == "event-type-misc"
