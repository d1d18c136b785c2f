from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any

import pytest

from daygrid import app
from daygrid.preview import PreviewConfig


class FakeRenderer:
    def __init__(self, config: PreviewConfig, calls: list[dict[str, Any]]) -> None:
        self.config = config
        self.calls = calls

    def render(self, layout, *, output_path=None):
        self.calls.append({"layout": layout, "output_path": output_path, "config": self.config})


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            [
                {"id": "p1", "title": "Team Sync", "start": "2024-01-15T09:00", "end": "2024-01-15T09:30", "isPlan": True},
                {"id": "r1", "title": "Team Sync", "start": "2024-01-15T09:15", "end": "2024-01-15T09:45", "isRecord": True},
                {"id": "p2", "title": "Review", "start": "2024-01-15T11:00", "end": "2024-01-15T12:00", "isPlan": True},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so anything load_env_file adds is undone after the test.
    names = (
        "HOUR_HEIGHT",
        "GRID_INTERVAL",
        "MIN_EVENT_HEIGHT",
        "PLAN_RECORD_MODE",
        "DEFAULT_DURATION",
        "DAY_START_HOUR",
        "DAY_END_HOUR",
        "CONTAINER_WIDTH",
    )
    for name in names:
        monkeypatch.setenv(f"DAYGRID_{name}", "")
        monkeypatch.delenv(f"DAYGRID_{name}")


def test_json_flag_prints_layout(tasks_file: Path) -> None:
    out = io.StringIO()

    code = app.main(["--tasks", str(tasks_file), "--date", "2024-01-15", "--json"], stdout=out)

    assert code == 0
    payload = json.loads(out.getvalue())
    assert payload["mode"] == "both"
    assert [entry["id"] for entry in payload["entries"]] == ["p1-r1", "plan-only-p2"]


def test_output_flag_renders_preview_with_cli_overrides(tasks_file: Path, tmp_path: Path) -> None:
    calls: list[dict[str, Any]] = []
    output = tmp_path / "preview.png"

    code = app.main(
        [
            "--tasks",
            str(tasks_file),
            "--date",
            "2024-01-15",
            "--mode",
            "plan",
            "--hour-height",
            "48",
            "--output",
            str(output),
        ],
        renderer_factory=lambda config: FakeRenderer(config, calls),
    )

    assert code == 0
    [call] = calls
    assert call["output_path"] == output
    assert call["config"].layout.hour_height == 48
    assert [entry.id for entry in call["layout"]] == ["p1", "p2"]


def test_env_file_supplies_configuration(tasks_file: Path, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("DAYGRID_PLAN_RECORD_MODE=record\n", encoding="utf-8")
    out = io.StringIO()

    app.main(
        ["--tasks", str(tasks_file), "--date", "2024-01-15", "--env-file", str(env_file), "--json"],
        stdout=out,
    )

    assert [entry["id"] for entry in json.loads(out.getvalue())["entries"]] == ["r1"]


def test_malformed_task_file_returns_error_code(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")

    assert app.main(["--tasks", str(broken), "--date", "2024-01-15", "--json"]) == 1


def test_missing_output_choice_is_a_usage_error(tasks_file: Path) -> None:
    with pytest.raises(SystemExit):
        app.main(["--tasks", str(tasks_file), "--date", "2024-01-15"])


def test_mixed_timestamp_forms_return_error_code(tmp_path: Path) -> None:
    mixed = tmp_path / "mixed.json"
    mixed.write_text(
        json.dumps(
            [
                {"id": "p1", "start": "2024-01-15T09:00:00Z", "end": "2024-01-15T10:00:00Z", "isPlan": True},
                {"id": "r1", "start": "2024-01-15T09:00:00", "end": "2024-01-15T10:00:00", "isRecord": True},
            ]
        ),
        encoding="utf-8",
    )

    assert app.main(["--tasks", str(mixed), "--date", "2024-01-15", "--json"]) == 1


def test_container_width_flag_caps_columns(tmp_path: Path) -> None:
    crowded = tmp_path / "crowded.json"
    crowded.write_text(
        json.dumps(
            [
                {"id": f"p{index}", "start": "2024-01-15T09:00", "end": "2024-01-15T10:00", "isPlan": True}
                for index in range(4)
            ]
        ),
        encoding="utf-8",
    )
    out = io.StringIO()

    code = app.main(
        [
            "--tasks",
            str(crowded),
            "--date",
            "2024-01-15",
            "--mode",
            "plan",
            "--container-width",
            "300",
            "--json",
        ],
        stdout=out,
    )

    assert code == 0
    widths = {entry["style"]["width"] for entry in json.loads(out.getvalue())["entries"]}
    assert widths == {"45%"}


def test_invalid_window_flags_return_error_code(tasks_file: Path) -> None:
    argv = ["--tasks", str(tasks_file), "--date", "2024-01-15", "--day-start-hour", "20", "--day-end-hour", "8"]

    assert app.main([*argv, "--json"]) == 1
