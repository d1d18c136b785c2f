"""Greedy column assignment for overlapping items on a single day."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import List, Sequence, TypeVar

from ..models import Positioned, TimeRange
from .overlap import duration_minutes, intervals_overlap, is_disjoint, minutes_of_day

LOGGER = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=TimeRange)

SCOPE_CLUSTER = "cluster"
SCOPE_DAY = "day"
SCOPES = (SCOPE_CLUSTER, SCOPE_DAY)


def require_items(name: str, items: object) -> list:
    """Copy ``items`` into a list, failing fast on ``None`` and non-iterables."""

    if items is None or isinstance(items, (str, bytes)) or not isinstance(items, Iterable):
        raise TypeError(f"{name} must be an iterable of tasks, got {type(items).__name__}")
    return list(items)


def assign_columns(items: Iterable[ItemT], *, scope: str = SCOPE_CLUSTER) -> List[Positioned[ItemT]]:
    """Place each item in the left-most column where it collides with nothing.

    Items are visited in ascending ``start_time`` order (ties keep their input
    order) and the result follows that order. ``scope`` controls what
    ``total_columns`` reports: the column count of the item's connected overlap
    cluster (``"cluster"``) or the column count of the whole day (``"day"``).
    """

    if scope not in SCOPES:
        raise ValueError(f"scope must be one of {SCOPES}, got {scope!r}")
    ordered = sorted(require_items("items", items), key=lambda item: item.start_time)
    if not ordered:
        return []

    columns: List[List[ItemT]] = []
    placement: List[int] = []
    for item in ordered:
        for index, members in enumerate(columns):
            if all(is_disjoint(item, member) for member in members):
                members.append(item)
                placement.append(index)
                break
        else:
            columns.append([item])
            placement.append(len(columns) - 1)

    if scope == SCOPE_DAY:
        totals = [len(columns)] * len(ordered)
    else:
        totals = _cluster_totals(ordered, placement)

    LOGGER.debug("Placed %d items into %d columns (scope=%s)", len(ordered), len(columns), scope)
    return [
        Positioned(
            task=item,
            column=column,
            total_columns=total,
            start_minutes=minutes_of_day(item.start_time),
            duration_minutes=duration_minutes(item),
        )
        for item, column, total in zip(ordered, placement, totals)
    ]


def overlap_clusters(items: Sequence[TimeRange]) -> List[int]:
    """Label each item with the index of its connected overlap component."""

    parent = list(range(len(items)))

    def find(index: int) -> int:
        while parent[index] != index:
            parent[index] = parent[parent[index]]
            index = parent[index]
        return index

    for i in range(len(items)):
        for j in range(i + 1, len(items)):
            if intervals_overlap(items[i], items[j]):
                root_i, root_j = find(i), find(j)
                if root_i != root_j:
                    parent[max(root_i, root_j)] = min(root_i, root_j)

    return [find(index) for index in range(len(items))]


def max_overlap_depth(items: Sequence[TimeRange]) -> int:
    """Largest number of items that are simultaneously active."""

    events: List[tuple] = []
    for item in items:
        if item.end_time <= item.start_time:
            continue
        events.append((item.start_time, 1))
        events.append((item.end_time, -1))
    # Ends sort before starts at the same instant: touching ranges do not stack.
    events.sort(key=lambda event: (event[0], event[1]))

    depth = best = 0
    for _, delta in events:
        depth += delta
        best = max(best, depth)
    return best


def _cluster_totals(ordered: Sequence[TimeRange], placement: Sequence[int]) -> List[int]:
    labels = overlap_clusters(ordered)
    widest: dict[int, int] = {}
    for label, column in zip(labels, placement):
        widest[label] = max(widest.get(label, 0), column + 1)
    return [widest[label] for label in labels]


__all__ = [
    "SCOPE_CLUSTER",
    "SCOPE_DAY",
    "assign_columns",
    "max_overlap_depth",
    "overlap_clusters",
    "require_items",
]
