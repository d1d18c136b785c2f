"""Pointer-driven interactions on the time grid."""

from .drag import (
    DragSelection,
    DragState,
    DragToCreate,
    minutes_from_offset,
    snap_minutes,
    time_at_pointer,
)
from .gestures import SwipeDetector, SwipeDirection
from .occupancy import OccupancyIndex
from .pointer import GridContainer, PointerEvent, PointerPhase

__all__ = [
    "DragSelection",
    "DragState",
    "DragToCreate",
    "GridContainer",
    "OccupancyIndex",
    "PointerEvent",
    "PointerPhase",
    "SwipeDetector",
    "SwipeDirection",
    "minutes_from_offset",
    "snap_minutes",
    "time_at_pointer",
]
