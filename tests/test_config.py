from __future__ import annotations

import os
from pathlib import Path

import pytest

from daygrid.config import ConfigError, LayoutConfig, load_env_file


def test_load_env_file_sets_missing_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("DAYGRID_GRID_INTERVAL=30\n# comment\nDAYGRID_HOUR_HEIGHT = 80\n", encoding="utf-8")

    monkeypatch.setenv("DAYGRID_GRID_INTERVAL", "")
    monkeypatch.delenv("DAYGRID_GRID_INTERVAL")
    monkeypatch.setenv("DAYGRID_HOUR_HEIGHT", "48")

    load_env_file(env_file)

    assert os.environ["DAYGRID_GRID_INTERVAL"] == "30"
    assert os.environ["DAYGRID_HOUR_HEIGHT"] == "48"


def test_load_env_file_is_noop_when_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    missing = tmp_path / "missing.env"
    monkeypatch.delenv("DAYGRID_GRID_INTERVAL", raising=False)

    load_env_file(missing)

    assert "DAYGRID_GRID_INTERVAL" not in os.environ


def test_invalid_line_raises(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("INVALID", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid line"):
        load_env_file(env_file)


def test_defaults() -> None:
    config = LayoutConfig()

    assert config.hour_height == 60
    assert config.grid_interval == 15
    assert config.min_event_height_px == 20
    assert config.plan_record_mode == "both"
    assert config.day_height == 1440


@pytest.mark.parametrize(
    "overrides",
    [
        {"grid_interval": 20},
        {"hour_height": 0},
        {"plan_record_mode": "split"},
        {"default_duration_minutes": 0},
        {"min_event_height_px": -1},
        {"column_gutter_percent": 100},
        {"day_start_hour": 10, "day_end_hour": 10},
        {"day_end_hour": 25},
        {"container_width_px": 0},
    ],
)
def test_invalid_values_are_rejected(overrides: dict) -> None:
    with pytest.raises(ConfigError):
        LayoutConfig(**overrides)


def test_from_env_reads_prefixed_variables() -> None:
    config = LayoutConfig.from_env(
        {
            "DAYGRID_GRID_INTERVAL": "30",
            "DAYGRID_HOUR_HEIGHT": "72.5",
            "DAYGRID_PLAN_RECORD_MODE": "record",
            "DAYGRID_MIN_EVENT_HEIGHT": "",
        }
    )

    assert config.grid_interval == 30
    assert config.hour_height == 72.5
    assert config.plan_record_mode == "record"
    assert config.min_event_height_px == 20


def test_from_env_rejects_unparseable_values() -> None:
    with pytest.raises(ConfigError, match="DAYGRID_GRID_INTERVAL"):
        LayoutConfig.from_env({"DAYGRID_GRID_INTERVAL": "quarter"})


def test_with_overrides_ignores_none() -> None:
    config = LayoutConfig(grid_interval=30)

    assert config.with_overrides(grid_interval=None) is config
    assert config.with_overrides(grid_interval=60, hour_height=None).grid_interval == 60


def test_day_height_covers_visible_window() -> None:
    config = LayoutConfig(hour_height=40, day_start_hour=6, day_end_hour=22)

    assert config.day_height == 640
    assert (config.window_start_minutes, config.window_end_minutes) == (360, 1320)


def test_from_env_reads_window_and_container_width() -> None:
    config = LayoutConfig.from_env(
        {
            "DAYGRID_DAY_START_HOUR": "7",
            "DAYGRID_DAY_END_HOUR": "21",
            "DAYGRID_CONTAINER_WIDTH": "520",
        }
    )

    assert (config.day_start_hour, config.day_end_hour) == (7, 21)
    assert config.container_width_px == 520
