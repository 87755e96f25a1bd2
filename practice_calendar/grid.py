"""Time grid configuration for the day view."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Final, Optional

from .dates import to_local


def _hour_label(hour: int) -> str:
    display = hour % 12 or 12
    suffix = "PM" if hour % 24 >= 12 else "AM"
    return f"{display} {suffix}"


@dataclass(frozen=True)
class TimeGridModel:
    """Visible hour window of the day view, split into fixed-length slots."""

    start_hour: int = 7
    slot_minutes: int = 30
    total_hours: int = 14

    def __post_init__(self) -> None:
        if self.total_hours <= 0:
            raise ValueError("total_hours must be positive")
        if self.start_hour < 0 or self.start_hour + self.total_hours > 24:
            raise ValueError("visible window must fall within a single day")
        if self.slot_minutes <= 0 or (self.total_hours * 60) % self.slot_minutes:
            raise ValueError("slot_minutes must evenly divide the visible window")

    @property
    def end_hour(self) -> int:
        return self.start_hour + self.total_hours

    @property
    def slot_count(self) -> int:
        return self.total_hours * 60 // self.slot_minutes

    @property
    def slots_per_hour(self) -> float:
        return 60 / self.slot_minutes

    @property
    def slot_duration(self) -> timedelta:
        return timedelta(minutes=self.slot_minutes)

    @property
    def hour_labels(self) -> tuple[str, ...]:
        return tuple(_hour_label(hour) for hour in range(self.start_hour, self.end_hour))

    def slot_start_time(self, slot: int) -> time:
        """Wall-clock time at the top edge of ``slot``."""

        minutes = self.start_hour * 60 + slot * self.slot_minutes
        minutes = max(0, min(minutes, 24 * 60 - 1))
        return time(minutes // 60, minutes % 60)

    def instant_to_slot_fraction(
        self,
        instant: datetime,
        *,
        day: Optional[date] = None,
        tz: tzinfo | None = None,
    ) -> float:
        """Return the unclamped fractional slot position of ``instant``.

        The position is measured from ``start_hour`` on ``day`` (the instant's own
        local date by default), so instants on later days land past
        :attr:`slot_count` and earlier ones go negative.
        """

        local = to_local(instant, tz).replace(tzinfo=None)
        reference_day = day if day is not None else local.date()
        origin = datetime.combine(reference_day, time(self.start_hour))
        minutes = (local - origin).total_seconds() / 60
        return minutes / self.slot_minutes

    def to_dict(self) -> dict:
        return {
            "startHour": self.start_hour,
            "slotMinutes": self.slot_minutes,
            "totalHours": self.total_hours,
            "slotCount": self.slot_count,
            "hourLabels": list(self.hour_labels),
        }


DEFAULT_GRID: Final[TimeGridModel] = TimeGridModel()

__all__ = ["DEFAULT_GRID", "TimeGridModel"]
