"""Pick and build the calendar view for the current navigation state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Mapping, Optional, Union

from ..dates import parse_date, shift_months, to_local
from ..grid import TimeGridModel
from ..snapshot import CalendarSnapshot
from .day import DayView, day_view_from_snapshot
from .month import MonthView, month_grid_from_snapshot

logger = logging.getLogger(__name__)

CalendarView = Union[DayView, MonthView]


class ViewMode(str, Enum):
    DAY = "day"
    MONTH = "month"


@dataclass(frozen=True)
class NavigationState:
    """Anchor date and view mode selected in the calendar page."""

    anchor_date: date
    view_mode: ViewMode = ViewMode.MONTH

    @classmethod
    def from_mapping(
        cls,
        payload: Mapping[str, object],
        *,
        now: Optional[datetime] = None,
        tz: tzinfo | None = None,
    ) -> "NavigationState":
        """Read ``{"anchorDate", "viewMode"}`` leniently.

        An unreadable anchor falls back to today and an unknown mode to the month
        view, each with a warning.
        """

        raw_anchor = payload.get("anchorDate")
        anchor = parse_date(raw_anchor, tz) if raw_anchor is not None else None
        if anchor is None:
            if raw_anchor is not None:
                logger.warning("Ignoring unreadable anchor date %r", raw_anchor)
            anchor = to_local(now or datetime.now(tz), tz).date()

        raw_mode = str(payload.get("viewMode") or ViewMode.MONTH.value).strip().lower()
        try:
            mode = ViewMode(raw_mode)
        except ValueError:
            logger.warning("Unknown view mode %r, showing month view", raw_mode)
            mode = ViewMode.MONTH
        return cls(anchor_date=anchor, view_mode=mode)

    def step(self, delta: int) -> "NavigationState":
        """Move by ``delta`` days in day mode or ``delta`` months in month mode."""

        if self.view_mode is ViewMode.DAY:
            return replace(self, anchor_date=self.anchor_date + timedelta(days=delta))
        return replace(self, anchor_date=shift_months(self.anchor_date, delta))

    def today(self, now: Optional[datetime] = None, tz: tzinfo | None = None) -> "NavigationState":
        current = to_local(now or datetime.now(tz), tz)
        return replace(self, anchor_date=current.date())

    def with_mode(self, view_mode: ViewMode) -> "NavigationState":
        return replace(self, view_mode=view_mode)


def build_view(
    snapshot: CalendarSnapshot,
    navigation: NavigationState,
    *,
    grid: Optional[TimeGridModel] = None,
    now: Optional[datetime] = None,
) -> CalendarView:
    """Build the day or month view for ``navigation`` from ``snapshot``.

    Called on every change of snapshot, anchor, or mode. Each call returns a fresh
    view; only the snapshot's own date buckets are reused.
    """

    now = now or datetime.now(snapshot.tz)
    if navigation.view_mode is ViewMode.DAY:
        return day_view_from_snapshot(navigation.anchor_date, snapshot, grid=grid, now=now)
    return month_grid_from_snapshot(navigation.anchor_date, snapshot, now=now)


__all__ = ["CalendarView", "NavigationState", "ViewMode", "build_view"]
