#!/usr/bin/env python3
"""Generate a sample day-view preview PNG (and its JSON layout) from built-in records."""

from __future__ import annotations

import argparse
import json
from datetime import datetime
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from practice_calendar import CalendarSnapshot, NavigationState, ViewMode, build_view
from practice_calendar.rendering import DayRenderer


PREVIEWS_DIR = PROJECT_ROOT / "previews"
DEFAULT_PNG_OUTPUT = PREVIEWS_DIR / "day_sample.png"

SAMPLE_NOW = datetime(2024, 3, 15, 10, 20)
SAMPLE_EVENTS = [
    {
        "id": "rec-hearing",
        "fields": {
            "Subject": "Motion hearing",
            "Start Time": "2024-03-15T09:00:00",
            "End Time": "2024-03-15T10:00:00",
            "Type": "Court Hearing",
            "Matter Name (from Matter)": ["Okafor v. Lagos Metro"],
        },
    },
    {
        "id": "rec-client",
        "fields": {
            "Subject": "Client call",
            "Start Time": "2024-03-15T09:30:00",
            "End Time": "2024-03-15T10:30:00",
            "Type": "Client Meeting",
            "Matter Name (from Matter)": ["Estate of Bello"],
        },
    },
    {
        "id": "rec-early",
        "fields": {
            "Subject": "Travel to court",
            "Start Time": "2024-03-15T06:00:00",
            "End Time": "2024-03-15T07:30:00",
            "Type": "Misc",
        },
    },
    {
        "id": "rec-deposition",
        "fields": {
            "Subject": "Deposition of expert witness",
            "Start Time": "2024-03-15T13:00:00",
            "End Time": "2024-03-15T16:00:00",
            "Type": "Deposition",
        },
    },
    {
        "id": "rec-filing",
        "fields": {
            "Subject": "Appeal filing deadline",
            "Start Time": "2024-03-15",
            "All Day": True,
            "Type": "Filing Deadline",
        },
    },
]
SAMPLE_TASKS = [
    {
        "id": "rec-task",
        "fields": {"Task Name": "Serve witness summons", "Due Date": "2024-03-15", "Priority": "High"},
    },
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the preview PNG (defaults to previews/day_sample.png).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Also write the day view layout next to the PNG.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    output_path: Path = args.output or DEFAULT_PNG_OUTPUT
    output_path.parent.mkdir(parents=True, exist_ok=True)

    snapshot = CalendarSnapshot.from_records(events=SAMPLE_EVENTS, tasks=SAMPLE_TASKS)
    navigation = NavigationState(anchor_date=SAMPLE_NOW.date(), view_mode=ViewMode.DAY)
    view = build_view(snapshot, navigation, now=SAMPLE_NOW)

    image = DayRenderer().render_day(view, SAMPLE_NOW)
    image.save(output_path)
    if args.json:
        output_path.with_suffix(".json").write_text(json.dumps(view.to_dict(), indent=2), encoding="utf-8")

    print(f"Wrote preview to {output_path}")


if __name__ == "__main__":
    main()
