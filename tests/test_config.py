from __future__ import annotations

import os
from pathlib import Path

import pytest
from zoneinfo import ZoneInfo

from practice_calendar.config import ConfigError, grid_from_env, load_env_file, timezone_from_env
from practice_calendar.grid import DEFAULT_GRID, TimeGridModel


def test_load_env_file_sets_missing_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("CALENDAR_START_HOUR=8\n# comment\nCALENDAR_TOTAL_HOURS = 10\n", encoding="utf-8")

    monkeypatch.setenv("CALENDAR_START_HOUR", "placeholder")
    monkeypatch.delenv("CALENDAR_START_HOUR")
    monkeypatch.setenv("CALENDAR_TOTAL_HOURS", "12")

    load_env_file(env_file)

    assert os.environ["CALENDAR_START_HOUR"] == "8"
    assert os.environ["CALENDAR_TOTAL_HOURS"] == "12"


def test_load_env_file_is_noop_when_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    missing = tmp_path / "missing.env"
    monkeypatch.delenv("CALENDAR_TIMEZONE", raising=False)

    load_env_file(missing)

    assert "CALENDAR_TIMEZONE" not in os.environ


def test_invalid_line_raises(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("INVALID", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid line"):
        load_env_file(env_file)


def test_grid_from_env_defaults() -> None:
    assert grid_from_env({}) == DEFAULT_GRID


def test_grid_from_env_overrides() -> None:
    grid = grid_from_env(
        {
            "CALENDAR_START_HOUR": "8",
            "CALENDAR_SLOT_MINUTES": "15",
            "CALENDAR_TOTAL_HOURS": "10",
        }
    )

    assert grid == TimeGridModel(start_hour=8, slot_minutes=15, total_hours=10)
    assert grid.slot_count == 40


@pytest.mark.parametrize(
    "environ, message",
    [
        ({"CALENDAR_START_HOUR": "seven"}, "must be an integer"),
        ({"CALENDAR_SLOT_MINUTES": "45"}, "Invalid calendar grid"),
        ({"CALENDAR_START_HOUR": "20"}, "Invalid calendar grid"),
    ],
)
def test_grid_from_env_rejects_bad_values(environ: dict, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        grid_from_env(environ)


def test_timezone_from_env() -> None:
    assert timezone_from_env({}) is None
    assert timezone_from_env({"CALENDAR_TIMEZONE": "Africa/Lagos"}) == ZoneInfo("Africa/Lagos")
    with pytest.raises(ConfigError, match="Unknown timezone"):
        timezone_from_env({"CALENDAR_TIMEZONE": "Mars/Olympus_Mons"})
