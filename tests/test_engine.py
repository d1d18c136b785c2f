from __future__ import annotations

from datetime import date, timedelta

import pytest

from daygrid.config import LayoutConfig
from daygrid.engine import layout_day, layout_week, occupancy_for
from daygrid.models import TaskPair

from factories import DAY, at, make_task


def sample_tasks():
    return [
        make_task("p1", at(9), at(9, 30), title="Team Sync", kind="plan"),
        make_task("r1", at(9, 15), at(9, 45), title="Team Sync", kind="record"),
        make_task("p2", at(9, 20), at(10), title="Focus", kind="plan"),
        make_task("r2", at(14), at(15), title="Gym", kind="record"),
        make_task("t1", at(16), at(16, 30), title="Call"),
        make_task("next", at(9, day=date(2024, 1, 16)), at(10, day=date(2024, 1, 16)), kind="plan"),
    ]


def test_both_mode_lays_out_pairs() -> None:
    layout = layout_day(sample_tasks(), DAY, LayoutConfig(plan_record_mode="both"))

    assert layout.is_paired
    assert all(isinstance(entry.item, TaskPair) for entry in layout)
    assert [entry.id for entry in layout] == ["p1-r1", "plan-only-p2", "record-only-r2", "plan-only-t1"]
    columns = {entry.id: (entry.positioned.column, entry.positioned.total_columns) for entry in layout}
    assert columns["p1-r1"] == (0, 2)
    assert columns["plan-only-p2"] == (1, 2)
    assert columns["record-only-r2"] == (0, 1)
    assert layout.total_columns == 2


@pytest.mark.parametrize(
    "mode, expected",
    [("plan", ["p1", "p2", "t1"]), ("record", ["r1", "r2"])],
)
def test_single_side_modes_skip_pairing(mode: str, expected: list[str]) -> None:
    layout = layout_day(sample_tasks(), DAY, LayoutConfig(plan_record_mode=mode))

    assert not layout.is_paired
    assert [entry.id for entry in layout] == expected


def test_entries_carry_geometry() -> None:
    layout = layout_day(sample_tasks(), DAY, LayoutConfig(plan_record_mode="plan", hour_height=40))

    first = layout.entries[0]
    assert first.geometry.top == pytest.approx(360)
    assert first.geometry.height == pytest.approx(20)
    assert first.kind == "plan"


def test_to_dict_exposes_render_contract() -> None:
    layout = layout_day(sample_tasks(), DAY)

    payload = layout.to_dict()

    assert payload["day"] == "2024-01-15"
    assert payload["mode"] == "both"
    first = payload["entries"][0]
    assert first["id"] == "p1-r1"
    assert first["planId"] == "p1"
    assert first["recordId"] == "r1"
    assert first["hasOverlap"] is True
    assert first["style"]["top"] == "540px"
    assert first["style"]["height"] == "45px"
    assert first["totalColumns"] == 2


def test_empty_day_gives_empty_layout() -> None:
    layout = layout_day([], DAY)

    assert len(layout) == 0
    assert layout.total_columns == 0


def test_none_tasks_fail_fast() -> None:
    with pytest.raises(TypeError):
        layout_day(None, DAY)  # type: ignore[arg-type]


def test_week_days_are_independent() -> None:
    days = [DAY + timedelta(days=offset) for offset in range(3)]

    layouts = layout_week(sample_tasks(), days, LayoutConfig(plan_record_mode="plan"))

    assert [len(layout) for layout in layouts] == [3, 1, 0]
    assert layouts[1].entries[0].positioned.total_columns == 1


def test_occupancy_index_reflects_rendered_rectangles() -> None:
    days = [DAY, DAY + timedelta(days=1)]
    layouts = layout_week(sample_tasks(), days, LayoutConfig(plan_record_mode="plan"))

    occupancy = occupancy_for(layouts)

    assert occupancy.task_at(0, 545, x_percent=10) == "p1"
    assert occupancy.task_at(0, 580, x_percent=80) == "p2"
    assert occupancy.task_at(0, 700) is None
    assert occupancy.task_at(1, 560) == "next"
    assert len(occupancy) == 4


def test_container_width_caps_rendered_columns_only() -> None:
    tasks = [make_task(f"p{index}", at(9), at(10), kind="plan") for index in range(3)]

    layout = layout_day(tasks, DAY, LayoutConfig(plan_record_mode="plan"), container_width_px=350)

    assert [entry.positioned.column for entry in layout] == [0, 1, 2]
    assert layout.total_columns == 3
    assert [entry.geometry.width for entry in layout] == pytest.approx([45, 45, 45])
    assert [entry.geometry.left for entry in layout] == pytest.approx([0.5, 50.5, 50.5])
