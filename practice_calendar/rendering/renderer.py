"""Renderer for composing a preview image of the day view."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from pathlib import Path
from typing import List, Sequence

from PIL import Image, ImageDraw, ImageFont

from ..dates import to_local
from ..models import CalendarEntry, EventType
from ..positioning import PositionedEntry
from ..views.day import DayView
from .layout import DEFAULT_LAYOUT, LayoutMetrics


def _font_length(font: ImageFont.ImageFont, text: str) -> float:
    return float(font.getlength(text))


def _load_font(path_candidates: Sequence[Path], size: int) -> ImageFont.ImageFont:
    for candidate in path_candidates:
        if candidate and candidate.exists():
            return ImageFont.truetype(str(candidate), size=size)
    return ImageFont.load_default()


def _default_font_candidates(bold: bool) -> List[Path]:
    names = [
        "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf",
        "Arial Bold.ttf" if bold else "Arial.ttf",
    ]
    candidates: List[Path] = []
    search_dirs = [
        Path("/usr/share/fonts/truetype/dejavu"),
        Path("/usr/share/fonts"),
        Path("/Library/Fonts"),
        Path.home() / ".fonts",
    ]
    for name in names:
        for directory in search_dirs:
            candidates.append(directory / name)
    return candidates


def _wall_clock(value: datetime, tz: tzinfo | None) -> datetime:
    return to_local(value, tz).replace(tzinfo=None)


def _format_clock(value: datetime) -> str:
    return value.strftime("%I:%M").lstrip("0") + " " + value.strftime("%p")


@dataclass
class RendererConfig:
    """Configuration values and font management for the renderer."""

    layout: LayoutMetrics = DEFAULT_LAYOUT
    font_regular_path: Path | None = None
    font_bold_path: Path | None = None
    preview_output_dir: Path | None = None
    background_color: int = 255
    foreground_color: int = 0
    grid_color: int = 200
    task_fill_color: int = 235
    header_font_size: int = 24
    time_label_font_size: int = 12
    card_title_font_size: int = 13
    card_body_font_size: int = 11

    # Court dates and filing deadlines are drawn darker than routine entries.
    type_fill_colors: tuple[tuple[EventType, int], ...] = (
        (EventType.COURT_HEARING, 120),
        (EventType.FILING_DEADLINE, 150),
        (EventType.DEPOSITION, 185),
        (EventType.CLIENT_MEETING, 215),
        (EventType.MISC, 240),
    )

    def __post_init__(self) -> None:
        if self.preview_output_dir is not None:
            self.preview_output_dir = Path(self.preview_output_dir)
            self.preview_output_dir.mkdir(parents=True, exist_ok=True)

    def _font_candidates(self, bold: bool) -> List[Path]:
        provided = self.font_bold_path if bold else self.font_regular_path
        candidates: List[Path] = []
        if provided is not None:
            candidates.append(Path(provided))
        candidates.extend(_default_font_candidates(bold))
        return candidates

    def font(self, size: int, *, bold: bool = False) -> ImageFont.ImageFont:
        return _load_font(self._font_candidates(bold), size)

    def fill_for(self, entry: CalendarEntry) -> int:
        if entry.is_task:
            return self.task_fill_color
        for event_type, color in self.type_fill_colors:
            if entry.event_type is event_type:
                return color
        return self.background_color


class DayRenderer:
    """Compose a grayscale preview of a :class:`DayView`."""

    def __init__(self, config: RendererConfig | None = None) -> None:
        self.config = config or RendererConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render_day(
        self,
        view: DayView,
        now: datetime,
        *,
        preview_name: str | None = None,
    ) -> Image.Image:
        """Render the day view image.

        Args:
            view: Day view produced by the layout engine.
            now: Current timestamp used for the current-time line.
            preview_name: Optional name for the preview PNG when preview mode
                is enabled.
        Returns:
            A Pillow image representing the day view.
        """

        cfg = self.config
        layout = cfg.layout
        image = Image.new(
            "L",
            (layout.canvas_width, layout.canvas_height),
            color=cfg.background_color,
        )
        draw = ImageDraw.Draw(image)

        self._draw_header(draw, view)
        self._draw_all_day_strip(draw, view.all_day_strip)
        self._draw_hour_grid(draw, view)
        self._draw_entries(draw, view)
        if view.is_today:
            self._draw_current_time(draw, view, now)

        if cfg.preview_output_dir is not None:
            name = preview_name or view.date_key
            output_path = cfg.preview_output_dir / f"{name}.png"
            image.save(output_path)

        return image

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def _draw_header(self, draw: ImageDraw.ImageDraw, view: DayView) -> None:
        cfg = self.config
        layout = cfg.layout
        header_font = cfg.font(cfg.header_font_size, bold=True)
        draw.text(
            (layout.timeline_left_padding, 18),
            view.date.strftime("%A, %B %d"),
            font=header_font,
            fill=cfg.foreground_color,
        )

    def _draw_all_day_strip(self, draw: ImageDraw.ImageDraw, entries: Sequence[CalendarEntry]) -> None:
        cfg = self.config
        layout = cfg.layout
        body_font = cfg.font(cfg.card_body_font_size)
        label_font = cfg.font(cfg.time_label_font_size)

        draw.text(
            (layout.timeline_left_padding, layout.all_day_top + 6),
            "All day",
            font=label_font,
            fill=cfg.foreground_color,
        )

        visible = list(entries[: layout.all_day_max_rows])
        hidden = len(entries) - len(visible)
        for row, entry in enumerate(visible):
            top = layout.all_day_top + row * layout.all_day_row_height + 2
            bottom = top + layout.all_day_row_height - 4
            draw.rounded_rectangle(
                (layout.card_left, top, layout.card_right, bottom),
                radius=layout.card_corner_radius,
                outline=cfg.foreground_color,
                width=1,
                fill=cfg.fill_for(entry),
            )
            text = entry.title
            if row == len(visible) - 1 and hidden > 0:
                text = f"{text} (+{hidden} more)"
            max_width = layout.card_width - layout.card_padding_x * 2
            draw.text(
                (layout.card_left + layout.card_padding_x, top + layout.card_padding_y),
                self._truncate_line(text, body_font, max_width),
                font=body_font,
                fill=cfg.foreground_color,
            )

    def _draw_hour_grid(self, draw: ImageDraw.ImageDraw, view: DayView) -> None:
        cfg = self.config
        layout = cfg.layout
        grid = view.grid
        label_font = cfg.font(cfg.time_label_font_size)

        for index, label in enumerate(grid.hour_labels):
            y = int(round(layout.y_for_slot(index * grid.slots_per_hour, grid)))
            draw.line(
                (layout.card_left, y, layout.card_right, y),
                fill=cfg.grid_color,
                width=layout.grid_line_thickness,
            )
            draw.text(
                (layout.timeline_left_padding, y - cfg.time_label_font_size // 2),
                label,
                font=label_font,
                fill=cfg.foreground_color,
            )
        bottom = int(round(layout.y_for_slot(grid.slot_count, grid)))
        draw.line(
            (layout.card_left, bottom, layout.card_right, bottom),
            fill=cfg.grid_color,
            width=layout.grid_line_thickness,
        )

    def _draw_entries(self, draw: ImageDraw.ImageDraw, view: DayView) -> None:
        cfg = self.config
        layout = cfg.layout
        title_font = cfg.font(cfg.card_title_font_size, bold=True)
        body_font = cfg.font(cfg.card_body_font_size)

        for item in view.timed_grid:
            top = layout.y_for_slot(item.start_slot, view.grid) + 1
            bottom = max(top + 1, layout.y_for_slot(item.end_slot, view.grid) - 1)
            left, right = layout.lane_bounds(item.lane, item.lane_count)
            draw.rounded_rectangle(
                (left, top, right, bottom),
                radius=layout.card_corner_radius,
                outline=cfg.foreground_color,
                width=2 if item.clipped_start or item.clipped_end else 1,
                fill=cfg.fill_for(item.entry),
            )

            content_left = left + layout.card_padding_x
            max_width = max(1, int(right - left) - layout.card_padding_x * 2)
            current_y = top + layout.card_padding_y
            for line in self._wrap_text(
                item.entry.title,
                title_font,
                max_width=max_width,
                max_lines=layout.title_max_lines,
            ):
                if current_y + cfg.card_title_font_size > bottom:
                    break
                draw.text((content_left, current_y), line, font=title_font, fill=cfg.foreground_color)
                current_y += cfg.card_title_font_size + 2

            detail = self._format_entry_detail(item, view.tz)
            if detail and current_y + cfg.card_body_font_size <= bottom:
                draw.text(
                    (content_left, current_y),
                    self._truncate_line(detail, body_font, max_width),
                    font=body_font,
                    fill=cfg.foreground_color,
                )

    def _format_entry_detail(self, item: PositionedEntry, tz: tzinfo | None = None) -> str:
        entry = item.entry
        parts: List[str] = []
        if entry.start is not None:
            start = _wall_clock(entry.start, tz)
            span = _format_clock(start)
            if entry.end is not None:
                end = _wall_clock(entry.end, tz)
                if end > start:
                    span = f"{span} – {_format_clock(end)}"
            parts.append(span)
        if entry.matter_label:
            parts.append(entry.matter_label)
        return " · ".join(parts)

    def _wrap_text(
        self,
        text: str,
        font: ImageFont.ImageFont,
        *,
        max_width: int,
        max_lines: int,
    ) -> List[str]:
        if not text:
            return []
        words = text.split()
        if not words:
            return []
        lines: List[str] = []
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if _font_length(font, candidate) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)

        wrapped = [self._truncate_line(line, font, max_width) for line in lines]
        if len(wrapped) <= max_lines:
            return wrapped
        truncated_lines = wrapped[:max_lines]
        last_line = truncated_lines[-1]
        ellipsis = "…"
        while last_line and _font_length(font, last_line + ellipsis) > max_width:
            last_line = last_line[:-1].rstrip()
        truncated_lines[-1] = (last_line + ellipsis) if last_line else ellipsis
        return truncated_lines

    def _truncate_line(self, line: str, font: ImageFont.ImageFont, max_width: int) -> str:
        if _font_length(font, line) <= max_width:
            return line
        ellipsis = "…"
        current = line
        while current and _font_length(font, current + ellipsis) > max_width:
            current = current[:-1].rstrip()
        return (current + ellipsis) if current else ellipsis

    def _draw_current_time(self, draw: ImageDraw.ImageDraw, view: DayView, now: datetime) -> None:
        cfg = self.config
        layout = cfg.layout
        grid = view.grid

        fraction = grid.instant_to_slot_fraction(now, day=view.date, tz=view.tz)
        if not 0 <= fraction <= grid.slot_count:
            return
        y = layout.y_for_slot(fraction, grid)
        draw.line(
            (layout.card_left, y, layout.card_right, y),
            fill=cfg.foreground_color,
            width=layout.current_time_line_thickness,
        )
        dot_x = layout.card_left - layout.column_gap
        radius = layout.current_time_dot_radius
        draw.ellipse((dot_x - radius, y - radius, dot_x + radius, y + radius), fill=cfg.foreground_color)


__all__ = ["DayRenderer", "RendererConfig"]
