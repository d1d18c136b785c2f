"""Top-level package for the calendar day/week layout engine."""

from __future__ import annotations

from .config import ConfigError, LayoutConfig
from .engine import DayLayout, LayoutEntry, layout_day, layout_week
from .layout import assign_columns, calculate_task_pair_layout, pair_plan_and_record, task_geometry
from .models import CalendarTask, Positioned, Priority, TaskPair, TaskStatus

__all__ = [
    "__version__",
    "CalendarTask",
    "ConfigError",
    "DayLayout",
    "LayoutConfig",
    "LayoutEntry",
    "Positioned",
    "Priority",
    "TaskPair",
    "TaskStatus",
    "assign_columns",
    "calculate_task_pair_layout",
    "layout_day",
    "layout_week",
    "pair_plan_and_record",
    "task_geometry",
]

__version__ = "0.1.0"
