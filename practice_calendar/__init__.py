"""Calendar layout engine for the practice-management day and month views."""

from __future__ import annotations

from .dates import bucket_by_date_key, to_date_key
from .grid import DEFAULT_GRID, TimeGridModel
from .models import CalendarEntry, EntryKind, EventType, TaskPriority
from .overlap import assign_lanes
from .positioning import PositionedEntry, position_entry
from .snapshot import CalendarSnapshot
from .views import (
    DayView,
    MonthCell,
    MonthView,
    NavigationState,
    ViewMode,
    assemble_day_view,
    build_agenda,
    build_month_grid,
    build_view,
)

__all__ = [
    "__version__",
    "CalendarEntry",
    "CalendarSnapshot",
    "DEFAULT_GRID",
    "DayView",
    "EntryKind",
    "EventType",
    "MonthCell",
    "MonthView",
    "NavigationState",
    "PositionedEntry",
    "TaskPriority",
    "TimeGridModel",
    "ViewMode",
    "assemble_day_view",
    "assign_lanes",
    "bucket_by_date_key",
    "build_agenda",
    "build_month_grid",
    "build_view",
    "position_entry",
    "to_date_key",
]

__version__ = "0.1.0"
