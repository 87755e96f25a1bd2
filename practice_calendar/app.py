"""Command line entry point for building calendar views from a record snapshot."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import Callable, Iterable, Optional, TextIO
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import ConfigError, grid_from_env, load_env_file, timezone_from_env
from .dates import parse_date, parse_instant, to_local
from .grid import TimeGridModel
from .rendering import DayRenderer, RendererConfig
from .snapshot import CalendarSnapshot
from .views import DayView, NavigationState, ViewMode, build_agenda, build_view

LOGGER = logging.getLogger(__name__)
VIEW_CHOICES = ("day", "month", "agenda")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build calendar views from an events/tasks snapshot")
    parser.add_argument(
        "snapshot",
        type=Path,
        help='JSON file holding {"events": [...], "tasks": [...]} records.',
    )
    parser.add_argument(
        "--view",
        choices=VIEW_CHOICES,
        default="month",
        help="Which view to build.",
    )
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Anchor date (YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument(
        "--now",
        type=str,
        default=None,
        help="Override the current time (ISO-8601), mainly for reproducible output.",
    )
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="IANA timezone of the viewer. Overrides CALENDAR_TIMEZONE.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Optional path to a .env file loaded before the grid is configured.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation for the printed view.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    render_group = parser.add_argument_group("Preview options")
    render_group.add_argument(
        "--png",
        type=Path,
        default=None,
        help="Write a PNG preview of the day view to this path.",
    )
    return parser


@dataclass
class AppSettings:
    snapshot_path: Path
    view: str
    anchor: date
    now: datetime
    timezone: Optional[tzinfo]
    grid: TimeGridModel
    png_path: Path | None
    indent: int


def _resolve_timezone(name: str | None) -> Optional[tzinfo]:
    if name is None:
        return timezone_from_env()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown timezone {name!r}") from exc


def resolve_settings(args: argparse.Namespace, *, now_provider: Callable[..., datetime] = datetime.now) -> AppSettings:
    load_env_file(args.env_file)
    timezone = _resolve_timezone(args.timezone)

    if args.now is not None:
        now = parse_instant(args.now)
        if now is None:
            raise ConfigError(f"--now must be an ISO-8601 timestamp, got {args.now!r}")
    else:
        now = now_provider(timezone)

    if args.date is not None:
        anchor = parse_date(args.date, timezone)
        if anchor is None:
            raise ConfigError(f"--date must be YYYY-MM-DD, got {args.date!r}")
    else:
        anchor = to_local(now, timezone).date()

    return AppSettings(
        snapshot_path=args.snapshot,
        view=args.view,
        anchor=anchor,
        now=now,
        timezone=timezone,
        grid=grid_from_env(),
        png_path=args.png,
        indent=args.indent,
    )


def load_snapshot(path: Path, *, tz: Optional[tzinfo] = None) -> CalendarSnapshot:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{path.name} must contain a JSON object")
    return CalendarSnapshot.from_mapping(payload, tz=tz)


def run(settings: AppSettings, *, out: TextIO = sys.stdout) -> dict:
    """Build the requested view, print it as JSON, and return the printed payload."""

    snapshot = load_snapshot(settings.snapshot_path, tz=settings.timezone)
    LOGGER.info(
        "Loaded %d events and %d tasks from %s",
        len(snapshot.events),
        len(snapshot.tasks),
        settings.snapshot_path,
    )
    if snapshot.unscheduled:
        LOGGER.info("%d entries have no usable date", len(snapshot.unscheduled))

    if settings.view == "agenda":
        view = build_agenda(snapshot, now=settings.now)
    else:
        navigation = NavigationState(anchor_date=settings.anchor, view_mode=ViewMode(settings.view))
        view = build_view(snapshot, navigation, grid=settings.grid, now=settings.now)

    if settings.png_path is not None:
        if isinstance(view, DayView):
            settings.png_path.parent.mkdir(parents=True, exist_ok=True)
            image = DayRenderer(RendererConfig()).render_day(view, settings.now)
            image.save(settings.png_path)
            LOGGER.info("Wrote day preview to %s", settings.png_path)
        else:
            LOGGER.warning("PNG previews are only available for the day view")

    payload = view.to_dict()
    json.dump(payload, out, indent=settings.indent)
    out.write("\n")
    return payload


def main(argv: Optional[Iterable[str]] = None, *, out: TextIO = sys.stdout) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        settings = resolve_settings(args)
    except ConfigError as exc:
        parser.error(str(exc))

    try:
        run(settings, out=out)
    except (OSError, ValueError) as exc:
        LOGGER.error("Could not read snapshot %s: %s", settings.snapshot_path, exc)
        parser.exit(2, f"error: could not read snapshot {settings.snapshot_path}: {exc}\n")


if __name__ == "__main__":
    main()
