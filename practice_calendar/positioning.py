"""Map timed entries onto slot ranges of the day grid."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Optional

from .grid import TimeGridModel
from .models import CalendarEntry


@dataclass(frozen=True)
class PositionedEntry:
    """A timed entry placed on the grid.

    ``end_slot`` is exclusive and always greater than ``start_slot``. ``lane`` and
    ``lane_count`` are filled in by :func:`practice_calendar.overlap.assign_lanes`.
    """

    entry: CalendarEntry
    start_slot: int
    end_slot: int
    lane: int = 0
    lane_count: int = 1
    clipped_start: bool = False
    clipped_end: bool = False

    @property
    def span(self) -> int:
        return self.end_slot - self.start_slot

    @property
    def grid_row(self) -> str:
        """1-based ``start / end`` row span for CSS grid layouts."""

        return f"{self.start_slot + 1} / {self.end_slot + 1}"

    def overlaps(self, other: "PositionedEntry") -> bool:
        return self.start_slot < other.end_slot and other.start_slot < self.end_slot

    def to_dict(self) -> dict:
        return {
            "entry": self.entry.to_dict(),
            "startSlot": self.start_slot,
            "endSlot": self.end_slot,
            "lane": self.lane,
            "laneCount": self.lane_count,
            "clippedStart": self.clipped_start,
            "clippedEnd": self.clipped_end,
            "gridRow": self.grid_row,
        }


def position_entry(
    entry: CalendarEntry,
    grid: TimeGridModel,
    *,
    day: Optional[date] = None,
    tz: tzinfo | None = None,
) -> Optional[PositionedEntry]:
    """Return the clamped slot range of ``entry`` or :data:`None` without a start.

    Entries reaching outside the visible window are clamped to its edges rather
    than dropped. A missing end, or an end at or before the start, gives a single
    slot.
    """

    if entry.start is None:
        return None

    slot_count = grid.slot_count
    start_fraction = grid.instant_to_slot_fraction(entry.start, day=day, tz=tz)
    if entry.end is not None:
        end_fraction = grid.instant_to_slot_fraction(entry.end, day=day, tz=tz)
    else:
        end_fraction = start_fraction + 1

    raw_start = math.floor(start_fraction)
    raw_end = math.ceil(end_fraction)

    start_slot = max(0, min(raw_start, slot_count - 1))
    end_slot = max(0, min(raw_end, slot_count))
    end_slot = max(end_slot, start_slot + 1)

    return PositionedEntry(
        entry=entry,
        start_slot=start_slot,
        end_slot=end_slot,
        clipped_start=raw_start < 0 or raw_start >= slot_count,
        clipped_end=raw_end > slot_count or raw_end <= 0,
    )


__all__ = ["PositionedEntry", "position_entry"]
