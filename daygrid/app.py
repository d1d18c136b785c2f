"""Command line entry point: lay out one day of tasks and preview the result."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, Optional, TextIO

from .config import GRID_INTERVALS, PLAN_RECORD_MODES, ConfigError, LayoutConfig, load_env_file
from .engine import DayLayout, layout_day
from .layout.columns import SCOPE_CLUSTER, SCOPES
from .preview import LayoutPreviewRenderer, PreviewConfig
from .tasks_file import TaskFileError, load_tasks

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calendar day layout engine")
    parser.add_argument(
        "--tasks",
        type=Path,
        required=True,
        help="JSON file containing the tasks to lay out.",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        required=True,
        help="Day to lay out (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Optional path to a .env file loaded before the configuration is read.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log layout details at DEBUG level.",
    )

    layout_group = parser.add_argument_group("Layout options")
    layout_group.add_argument(
        "--mode",
        choices=PLAN_RECORD_MODES,
        default=None,
        help="Which tasks to show. 'both' pairs plans with records.",
    )
    layout_group.add_argument(
        "--grid-interval",
        type=int,
        choices=GRID_INTERVALS,
        default=None,
        help="Snap granularity in minutes.",
    )
    layout_group.add_argument(
        "--hour-height",
        type=float,
        default=None,
        help="Pixels per hour on the time grid.",
    )
    layout_group.add_argument(
        "--day-start-hour",
        type=int,
        default=None,
        help="First hour shown on the grid.",
    )
    layout_group.add_argument(
        "--day-end-hour",
        type=int,
        default=None,
        help="Hour at which the grid ends (exclusive).",
    )
    layout_group.add_argument(
        "--container-width",
        type=float,
        default=None,
        help="Day column width in pixels; narrow columns cap side-by-side tasks.",
    )
    layout_group.add_argument(
        "--scope",
        choices=SCOPES,
        default=SCOPE_CLUSTER,
        help="Report column counts per overlap cluster or for the whole day.",
    )

    output_group = parser.add_argument_group("Output options")
    output_group.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write a PNG preview of the layout to this path.",
    )
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print the layout as JSON on stdout.",
    )
    return parser


@dataclass
class AppSettings:
    tasks_path: Path
    day: date
    layout: LayoutConfig
    scope: str
    output: Path | None
    emit_json: bool


def resolve_settings(args: argparse.Namespace) -> AppSettings:
    load_env_file(args.env_file)
    layout = LayoutConfig.from_env().with_overrides(
        plan_record_mode=args.mode,
        grid_interval=args.grid_interval,
        hour_height=args.hour_height,
        day_start_hour=args.day_start_hour,
        day_end_hour=args.day_end_hour,
        container_width_px=args.container_width,
    )
    return AppSettings(
        tasks_path=args.tasks,
        day=args.date,
        layout=layout,
        scope=args.scope,
        output=args.output,
        emit_json=args.json,
    )


def run(
    settings: AppSettings,
    *,
    renderer_factory: Callable[[PreviewConfig], LayoutPreviewRenderer] = LayoutPreviewRenderer,
    stdout: TextIO | None = None,
) -> DayLayout:
    tasks = load_tasks(settings.tasks_path)
    layout = layout_day(tasks, settings.day, settings.layout, scope=settings.scope)
    LOGGER.info(
        "Laid out %d of %d tasks for %s across %d columns",
        len(layout),
        len(tasks),
        settings.day.isoformat(),
        layout.total_columns,
    )

    if settings.output is not None:
        renderer = renderer_factory(PreviewConfig(layout=settings.layout))
        renderer.render(layout, output_path=settings.output)
        LOGGER.info("Wrote preview to %s", settings.output)

    if settings.emit_json:
        out = stdout or sys.stdout
        json.dump(layout.to_dict(), out, indent=2)
        out.write("\n")
    return layout


def main(
    argv: Optional[Iterable[str]] = None,
    *,
    renderer_factory: Callable[[PreviewConfig], LayoutPreviewRenderer] = LayoutPreviewRenderer,
    stdout: TextIO | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.output is None and not args.json:
        parser.error("nothing to do: pass --output and/or --json")

    try:
        settings = resolve_settings(args)
        run(settings, renderer_factory=renderer_factory, stdout=stdout)
    except (ConfigError, TaskFileError) as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
