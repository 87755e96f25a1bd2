"""Environment driven configuration for the calendar engine and CLI."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .grid import DEFAULT_GRID, TimeGridModel

__all__ = [
    "ConfigError",
    "ENV_SLOT_MINUTES",
    "ENV_START_HOUR",
    "ENV_TIMEZONE",
    "ENV_TOTAL_HOURS",
    "grid_from_env",
    "load_env_file",
    "timezone_from_env",
]

ENV_START_HOUR = "CALENDAR_START_HOUR"
ENV_SLOT_MINUTES = "CALENDAR_SLOT_MINUTES"
ENV_TOTAL_HOURS = "CALENDAR_TOTAL_HOURS"
ENV_TIMEZONE = "CALENDAR_TIMEZONE"


class ConfigError(RuntimeError):
    """Raised when configuration values are malformed."""


def load_env_file(env_file: str | Path | None = None) -> None:
    """Load environment variables from ``env_file`` if provided.

    When ``env_file`` is :data:`None`, the loader looks for a ``.env`` file in the
    current working directory. Existing environment variables are never overwritten.
    """

    path = Path(env_file) if env_file is not None else Path.cwd() / ".env"
    if not path.exists() or not path.is_file():
        return

    for key, value in _iter_env_entries(path):
        os.environ.setdefault(key, value)


def _iter_env_entries(path: Path) -> Iterable[tuple[str, str]]:
    for raw_line in path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise ConfigError(
                f"Invalid line in {path.name!r}: {raw_line!r}. Expected KEY=VALUE format."
            )
        key, raw_value = line.split("=", 1)
        key = key.strip()
        value = raw_value.strip().strip('"').strip("'")
        if not key:
            raise ConfigError(f"Environment variable key is missing in line: {raw_line!r}")
        yield key, value


def _int_setting(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc


def grid_from_env(environ: Mapping[str, str] | None = None) -> TimeGridModel:
    """Build the time grid from ``CALENDAR_*`` variables, falling back to defaults."""

    env = os.environ if environ is None else environ
    start_hour = _int_setting(env, ENV_START_HOUR, DEFAULT_GRID.start_hour)
    slot_minutes = _int_setting(env, ENV_SLOT_MINUTES, DEFAULT_GRID.slot_minutes)
    total_hours = _int_setting(env, ENV_TOTAL_HOURS, DEFAULT_GRID.total_hours)
    try:
        return TimeGridModel(
            start_hour=start_hour,
            slot_minutes=slot_minutes,
            total_hours=total_hours,
        )
    except ValueError as exc:
        raise ConfigError(f"Invalid calendar grid configuration: {exc}") from exc


def timezone_from_env(environ: Mapping[str, str] | None = None) -> ZoneInfo | None:
    """Return the viewer timezone named by ``CALENDAR_TIMEZONE``.

    :data:`None` means "use the system local timezone".
    """

    env = os.environ if environ is None else environ
    name = (env.get(ENV_TIMEZONE) or "").strip()
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown timezone {name!r} in {ENV_TIMEZONE}") from exc
