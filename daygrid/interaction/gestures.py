"""Fast horizontal swipe detection used to step between days."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .pointer import PointerEvent, PointerPhase

LOGGER = logging.getLogger(__name__)

SWIPE_MIN_DISTANCE_PX = 50.0
SWIPE_MAX_DURATION_MS = 500.0


class SwipeDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass
class SwipeDetector:
    """Recognise a quick, mostly horizontal swipe from one pointer."""

    min_distance: float = SWIPE_MIN_DISTANCE_PX
    max_duration_ms: float = SWIPE_MAX_DURATION_MS

    def __post_init__(self) -> None:
        self._origin: Optional[PointerEvent] = None

    def handle(self, event: PointerEvent) -> Optional[SwipeDirection]:
        if event.phase is PointerPhase.DOWN:
            if self._origin is None:
                self._origin = event
            return None

        origin = self._origin
        if origin is None or event.pointer_id != origin.pointer_id:
            return None
        if event.phase is PointerPhase.MOVE:
            return None

        self._origin = None
        dx = event.x - origin.x
        dy = event.y - origin.y
        elapsed = event.timestamp_ms - origin.timestamp_ms
        if elapsed > self.max_duration_ms:
            LOGGER.debug("Ignoring slow swipe (%.0f ms)", elapsed)
            return None
        if abs(dx) <= self.min_distance or abs(dx) <= abs(dy):
            return None
        return SwipeDirection.LEFT if dx < 0 else SwipeDirection.RIGHT


__all__ = [
    "SWIPE_MAX_DURATION_MS",
    "SWIPE_MIN_DISTANCE_PX",
    "SwipeDetector",
    "SwipeDirection",
]
