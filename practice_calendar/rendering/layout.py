"""Layout constants and helpers for the day view preview."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ..grid import TimeGridModel


@dataclass(frozen=True)
class LayoutMetrics:
    """Collection of reusable layout constants for the preview canvas."""

    canvas_width: int = 480
    canvas_height: int = 800
    header_height: int = 64
    all_day_row_height: int = 26
    all_day_max_rows: int = 3
    footer_height: int = 24
    hour_label_width: int = 56
    timeline_left_padding: int = 12
    timeline_right_padding: int = 16
    column_gap: int = 6
    lane_gap: int = 3
    current_time_line_thickness: int = 3
    current_time_dot_radius: int = 5
    grid_line_thickness: int = 1
    card_corner_radius: int = 6
    card_padding_x: int = 6
    card_padding_y: int = 4
    title_max_lines: int = 2

    @property
    def all_day_top(self) -> int:
        return self.header_height

    @property
    def all_day_height(self) -> int:
        return self.all_day_row_height * self.all_day_max_rows

    @property
    def timeline_top(self) -> int:
        return self.all_day_top + self.all_day_height + self.column_gap

    @property
    def timeline_bottom(self) -> int:
        return self.canvas_height - self.footer_height

    @property
    def timeline_height(self) -> int:
        return self.timeline_bottom - self.timeline_top

    @property
    def card_left(self) -> int:
        return self.timeline_left_padding + self.hour_label_width + self.column_gap

    @property
    def card_right(self) -> int:
        return self.canvas_width - self.timeline_right_padding

    @property
    def card_width(self) -> int:
        return self.card_right - self.card_left

    def slot_height(self, grid: TimeGridModel) -> float:
        return self.timeline_height / grid.slot_count

    def y_for_slot(self, slot: float, grid: TimeGridModel) -> float:
        """Return the vertical offset of a (possibly fractional) slot boundary."""

        clamped = max(0.0, min(float(slot), float(grid.slot_count)))
        return self.timeline_top + clamped * self.slot_height(grid)

    def lane_bounds(self, lane: int, lane_count: int) -> tuple[float, float]:
        """Horizontal extent of ``lane`` when the column is split ``lane_count`` ways."""

        lanes = max(1, lane_count)
        width = (self.card_width - self.lane_gap * (lanes - 1)) / lanes
        left = self.card_left + lane * (width + self.lane_gap)
        return left, left + width


DEFAULT_LAYOUT: Final[LayoutMetrics] = LayoutMetrics()

__all__ = ["DEFAULT_LAYOUT", "LayoutMetrics"]
