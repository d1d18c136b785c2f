"""Pair planned and recorded occurrences of the same activity for the split view."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence

from ..models import CalendarTask, Positioned, TaskPair
from .columns import SCOPE_CLUSTER, assign_columns, require_items
from .overlap import intervals_overlap

LOGGER = logging.getLogger(__name__)

DEFAULT_GUTTER_PERCENT = 1.0


@dataclass(frozen=True)
class ColumnSpan:
    """Horizontal placement inside a day column, in percent of its width."""

    left: float
    width: float


def make_pair(
    plan: Optional[CalendarTask] = None,
    record: Optional[CalendarTask] = None,
) -> TaskPair:
    """Build a pair whose interval is the envelope of the sides present."""

    sides = [task for task in (plan, record) if task is not None]
    if not sides:
        raise ValueError("A task pair needs a plan side, a record side, or both.")

    if plan is not None and record is not None:
        pair_id = f"{plan.id}-{record.id}"
        has_overlap = intervals_overlap(plan, record)
    elif plan is not None:
        pair_id = f"plan-only-{plan.id}"
        has_overlap = False
    else:
        pair_id = f"record-only-{record.id}"  # type: ignore[union-attr]
        has_overlap = False

    return TaskPair(
        id=pair_id,
        start_time=min(task.start_time for task in sides),
        end_time=max(task.end_time for task in sides),
        plan_task=plan,
        record_task=record,
        has_overlap=has_overlap,
    )


def ids_linked(plan: CalendarTask, record: CalendarTask) -> bool:
    """Whether the record id refers back to the plan id.

    ``record-42`` links to ``plan-42`` and ``record-for-plan-42`` links to
    ``plan-42``.
    """

    if not plan.id or not record.id:
        return False
    if plan.id in record.id:
        return True
    return "plan" in plan.id and plan.id.replace("plan", "record", 1) == record.id


def is_identity_match(plan: CalendarTask, record: CalendarTask) -> bool:
    return plan.title == record.title or ids_linked(plan, record)


def pair_plan_and_record(
    plan_tasks: Iterable[CalendarTask],
    record_tasks: Iterable[CalendarTask],
    day: date,
) -> List[TaskPair]:
    """Match the day's plans with its records, first match wins.

    Matching runs in four phases over items not claimed by an earlier phase:
    same title or linked ids, then overlapping intervals, then the remaining
    plans alone, then the remaining records alone. Pairs are returned sorted by
    ``start_time``.
    """

    plans = [task for task in require_items("plan_tasks", plan_tasks) if task.start_time.date() == day]
    records = [task for task in require_items("record_tasks", record_tasks) if task.start_time.date() == day]

    claimed_plans = [False] * len(plans)
    claimed_records = [False] * len(records)
    pairs: List[TaskPair] = []

    def match_phase(predicate: Callable[[CalendarTask, CalendarTask], bool]) -> None:
        for plan_index, plan in enumerate(plans):
            if claimed_plans[plan_index]:
                continue
            for record_index, record in enumerate(records):
                if claimed_records[record_index] or not predicate(plan, record):
                    continue
                claimed_plans[plan_index] = True
                claimed_records[record_index] = True
                pairs.append(make_pair(plan, record))
                break

    match_phase(is_identity_match)
    match_phase(intervals_overlap)

    leftover_plans = [plan for plan, claimed in zip(plans, claimed_plans) if not claimed]
    leftover_records = [record for record, claimed in zip(records, claimed_records) if not claimed]
    pairs.extend(make_pair(plan=plan) for plan in leftover_plans)
    pairs.extend(make_pair(record=record) for record in leftover_records)

    LOGGER.debug(
        "Paired %d plans with %d records on %s: %d matched, %d plan-only, %d record-only",
        len(plans),
        len(records),
        day.isoformat(),
        len(pairs) - len(leftover_plans) - len(leftover_records),
        len(leftover_plans),
        len(leftover_records),
    )
    pairs.sort(key=lambda pair: pair.start_time)
    return pairs


def assign_pair_columns(
    pairs: Sequence[TaskPair],
    *,
    scope: str = SCOPE_CLUSTER,
) -> List[Positioned[TaskPair]]:
    """Run the column assignment over pairs, each pair being one interval."""

    return assign_columns(pairs, scope=scope)


def calculate_task_pair_layout(
    column: int,
    total_columns: int,
    gutter: float = DEFAULT_GUTTER_PERCENT,
) -> ColumnSpan:
    """Split the available width evenly with ``gutter`` percent between columns."""

    total = max(1, total_columns)
    column = min(max(0, column), total - 1)
    width = (100.0 - gutter * (total - 1)) / total
    return ColumnSpan(left=column * (width + gutter), width=width)


__all__ = [
    "ColumnSpan",
    "assign_pair_columns",
    "calculate_task_pair_layout",
    "ids_linked",
    "is_identity_match",
    "make_pair",
    "pair_plan_and_record",
]
