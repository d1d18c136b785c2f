"""Day and week layout: route tasks through pairing and columns, then geometry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .config import DEFAULT_CONFIG, LayoutConfig
from .interaction.occupancy import OccupancyIndex
from .layout.columns import SCOPE_CLUSTER, assign_columns, require_items
from .layout.geometry import Geometry, positioned_geometry
from .layout.pairing import assign_pair_columns, pair_plan_and_record
from .models import CalendarTask, Positioned, TaskPair

LOGGER = logging.getLogger(__name__)

LayoutItem = Union[CalendarTask, TaskPair]


@dataclass(frozen=True)
class LayoutEntry:
    """A positioned task or pair together with its rectangle."""

    positioned: Positioned[Any]
    geometry: Geometry

    @property
    def item(self) -> LayoutItem:
        return self.positioned.task

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def title(self) -> str:
        return self.item.title

    @property
    def kind(self) -> str:
        if isinstance(self.item, TaskPair):
            return "pair"
        return self.item.kind

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "kind": self.kind,
            "start": self.item.start_time.isoformat(),
            "end": self.item.end_time.isoformat(),
            "column": self.positioned.column,
            "totalColumns": self.positioned.total_columns,
            "startMinutes": self.positioned.start_minutes,
            "durationMinutes": self.positioned.duration_minutes,
            "style": self.geometry.css(),
        }
        if isinstance(self.item, TaskPair):
            payload["planId"] = self.item.plan_task.id if self.item.plan_task else None
            payload["recordId"] = self.item.record_task.id if self.item.record_task else None
            payload["hasOverlap"] = self.item.has_overlap
        return payload


@dataclass(frozen=True)
class DayLayout:
    day: date
    mode: str
    entries: Tuple[LayoutEntry, ...]

    @property
    def is_paired(self) -> bool:
        return self.mode == "both"

    @property
    def total_columns(self) -> int:
        return max((entry.positioned.total_columns for entry in self.entries), default=0)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day.isoformat(),
            "mode": self.mode,
            "entries": [entry.to_dict() for entry in self.entries],
        }


def split_by_kind(tasks: Iterable[CalendarTask]) -> Tuple[List[CalendarTask], List[CalendarTask]]:
    """Separate records from everything else; plain tasks count as plans."""

    plans: List[CalendarTask] = []
    records: List[CalendarTask] = []
    for task in tasks:
        (records if task.is_record else plans).append(task)
    return plans, records


def layout_day(
    tasks: Iterable[CalendarTask],
    day: date,
    config: LayoutConfig = DEFAULT_CONFIG,
    *,
    scope: str = SCOPE_CLUSTER,
    container_width_px: Optional[float] = None,
) -> DayLayout:
    """Lay out the tasks that start on ``day`` according to ``config``.

    ``plan_record_mode == "both"`` pairs plans with records before assigning
    columns; ``"plan"`` and ``"record"`` lay out only that side.
    ``container_width_px`` overrides the configured container width used to
    cap the number of side-by-side columns.
    """

    config = config.with_overrides(container_width_px=container_width_px)
    day_tasks = [task for task in require_items("tasks", tasks) if task.start_time.date() == day]
    plans, records = split_by_kind(day_tasks)
    mode = config.plan_record_mode

    positioned: Sequence[Positioned[Any]]
    if mode == "both":
        pairs = pair_plan_and_record(plans, records, day)
        positioned = assign_pair_columns(pairs, scope=scope)
    elif mode == "record":
        positioned = assign_columns(records, scope=scope)
    else:
        positioned = assign_columns(plans, scope=scope)

    entries = tuple(
        LayoutEntry(positioned=item, geometry=positioned_geometry(item, config)) for item in positioned
    )
    LOGGER.debug("Laid out %d entries for %s in %s mode", len(entries), day.isoformat(), mode)
    return DayLayout(day=day, mode=mode, entries=entries)


def layout_week(
    tasks: Iterable[CalendarTask],
    days: Sequence[date],
    config: LayoutConfig = DEFAULT_CONFIG,
    *,
    scope: str = SCOPE_CLUSTER,
    container_width_px: Optional[float] = None,
) -> List[DayLayout]:
    """Lay out each day independently; no state is shared between days."""

    all_tasks = require_items("tasks", tasks)
    return [
        layout_day(all_tasks, day, config, scope=scope, container_width_px=container_width_px)
        for day in days
    ]


def occupancy_for(layouts: Sequence[DayLayout]) -> OccupancyIndex:
    """Index the rendered rectangles of ``layouts``, one day column each."""

    return OccupancyIndex.from_columns(layout.entries for layout in layouts)


__all__ = [
    "DayLayout",
    "LayoutEntry",
    "layout_day",
    "layout_week",
    "occupancy_for",
    "split_by_kind",
]
