#!/usr/bin/env python3
"""Generate a sample day layout preview (PNG and/or JSON) from built-in tasks."""

from __future__ import annotations

import argparse
import json
from datetime import date, datetime, time, timedelta
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from daygrid import CalendarTask, LayoutConfig, layout_day
from daygrid.config import PLAN_RECORD_MODES
from daygrid.preview import LayoutPreviewRenderer, PreviewConfig
from daygrid.tasks_file import dump_task


PREVIEWS_DIR = PROJECT_ROOT / "previews"
DEFAULT_PNG_OUTPUT = PREVIEWS_DIR / "day_layout_sample.png"


def sample_tasks(day: date) -> list[CalendarTask]:
    def at(hour: int, minute: int = 0) -> datetime:
        return datetime.combine(day, time(hour, minute))

    return [
        CalendarTask("plan-1", "Team Sync", at(9), at(9, 30), is_plan=True),
        CalendarTask("record-1", "Team Sync", at(9, 15), at(9, 45), is_record=True),
        CalendarTask("plan-2", "Deep work", at(10), at(12), is_plan=True),
        CalendarTask("record-2", "Writing", at(10, 30), at(11, 45), is_record=True),
        CalendarTask("plan-3", "Lunch", at(12, 30), at(13, 15), is_plan=True),
        CalendarTask("plan-4", "Design review", at(14), at(15), is_plan=True),
        CalendarTask("plan-5", "1:1", at(14, 30), at(15), is_plan=True),
        CalendarTask("record-3", "Gym", at(18), at(19), is_record=True),
        CalendarTask("task-1", "Call plumber", at(16), at(16, 10)),
    ] + [
        CalendarTask(
            f"nested-{i}",
            f"Nested {i}",
            at(19, 30) + timedelta(minutes=15 * i),
            at(21) - timedelta(minutes=15 * i),
            is_plan=True,
        )
        for i in range(3)
    ]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_PNG_OUTPUT,
        help="Where to write the PNG preview (defaults to previews/day_layout_sample.png).",
    )
    parser.add_argument(
        "--mode",
        choices=PLAN_RECORD_MODES,
        default="both",
        help="Plan/record display mode.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Also print the layout as JSON.",
    )
    parser.add_argument(
        "--save-tasks",
        type=Path,
        default=None,
        help="Write the sample tasks as a task file usable with the daygrid CLI.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    day = date.today()
    config = LayoutConfig(plan_record_mode=args.mode, day_start_hour=6, day_end_hour=22)
    tasks = sample_tasks(day)
    layout = layout_day(tasks, day, config)

    renderer = LayoutPreviewRenderer(PreviewConfig(layout=config))
    renderer.render(layout, output_path=args.output)
    if args.json:
        print(json.dumps(layout.to_dict(), indent=2))

    print(f"Wrote preview to {args.output}")

    if args.save_tasks is not None:
        args.save_tasks.parent.mkdir(parents=True, exist_ok=True)
        args.save_tasks.write_text(
            json.dumps({"tasks": [dump_task(task) for task in tasks]}, indent=2),
            encoding="utf-8",
        )
        print(f"Wrote tasks to {args.save_tasks}")


if __name__ == "__main__":
    main()
