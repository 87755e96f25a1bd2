"""Day, month and agenda view builders."""

from .agenda import AgendaView, build_agenda
from .day import DayView, assemble_day_view, day_view_from_snapshot
from .month import (
    WEEKDAY_HEADER,
    MonthCell,
    MonthView,
    build_month_grid,
    month_grid_from_snapshot,
)
from .orchestrator import CalendarView, NavigationState, ViewMode, build_view

__all__ = [
    "AgendaView",
    "CalendarView",
    "DayView",
    "MonthCell",
    "MonthView",
    "NavigationState",
    "ViewMode",
    "WEEKDAY_HEADER",
    "assemble_day_view",
    "build_agenda",
    "build_month_grid",
    "build_view",
    "day_view_from_snapshot",
    "month_grid_from_snapshot",
]
