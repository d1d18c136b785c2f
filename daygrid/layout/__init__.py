"""Pure layout passes: overlap detection, columns, pairing and geometry."""

from .columns import SCOPE_CLUSTER, SCOPE_DAY, assign_columns, max_overlap_depth, overlap_clusters
from .geometry import Geometry, max_columns_for_width, positioned_geometry, task_geometry
from .overlap import intervals_overlap, minutes_of_day
from .pairing import (
    ColumnSpan,
    assign_pair_columns,
    calculate_task_pair_layout,
    make_pair,
    pair_plan_and_record,
)

__all__ = [
    "ColumnSpan",
    "Geometry",
    "SCOPE_CLUSTER",
    "SCOPE_DAY",
    "assign_columns",
    "assign_pair_columns",
    "calculate_task_pair_layout",
    "intervals_overlap",
    "make_pair",
    "max_columns_for_width",
    "max_overlap_depth",
    "minutes_of_day",
    "overlap_clusters",
    "pair_plan_and_record",
    "positioned_geometry",
    "task_geometry",
]
