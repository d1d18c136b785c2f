"""Drag-to-create: map pointer positions to snapped times on the grid."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Callable, Optional

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..layout.overlap import MINUTES_PER_DAY
from .occupancy import OccupancyIndex
from .pointer import GridContainer, PointerEvent, PointerPhase

LOGGER = logging.getLogger(__name__)


def minutes_from_offset(relative_y: float, hour_height: float) -> float:
    """Minutes spanned by a vertical offset from the top of the grid."""

    return relative_y / (24 * hour_height) * MINUTES_PER_DAY


def snap_minutes(minutes: float, grid_interval: int) -> int:
    """Round to the nearest multiple of ``grid_interval``; ties go to the later slot."""

    snapped = int(math.floor(minutes / grid_interval + 0.5)) * grid_interval
    return min(max(snapped, 0), MINUTES_PER_DAY)


def time_at_pointer(
    moment: datetime,
    client_y: float,
    container: Optional[GridContainer],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> datetime:
    """Snapped time on ``moment``'s day under the pointer.

    Offsets are measured from ``config.day_start_hour`` and the result stays
    inside the visible window. Returns ``moment`` unchanged when the grid
    container is not available so a pointer-move handler never fails.
    """

    if container is None:
        return moment
    offset = minutes_from_offset(container.relative_y(client_y), config.hour_height)
    minutes = snap_minutes(config.window_start_minutes + offset, config.grid_interval)
    minutes = min(max(minutes, config.window_start_minutes), config.window_end_minutes)
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(minutes=minutes)


@dataclass(frozen=True)
class DragSelection:
    """Candidate time range handed to the creation callback."""

    start: datetime
    end: datetime
    column: int

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragToCreate:
    """State machine turning one pointer gesture into a new task range.

    Mouse and touch input both arrive as :class:`PointerEvent`. Only the pointer
    that started the drag is followed; other pointers are ignored until it is
    released.
    """

    def __init__(
        self,
        on_create: Callable[[DragSelection], None],
        config: LayoutConfig = DEFAULT_CONFIG,
        *,
        occupancy: Optional[OccupancyIndex] = None,
        max_gesture_ms: Optional[float] = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.on_create = on_create
        self.config = config
        self.occupancy = occupancy
        self.max_gesture_ms = max_gesture_ms
        self.logger = logger or LOGGER

        self._state = DragState.IDLE
        self._pointer_id: Optional[int] = None
        self._pressed_at = 0.0
        self._day: Optional[date] = None
        self._column = 0
        self._start: Optional[datetime] = None
        self._end: Optional[datetime] = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def selection(self) -> Optional[DragSelection]:
        """The range currently being dragged, for preview rendering."""

        if self._start is None or self._end is None:
            return None
        return DragSelection(start=self._start, end=self._end, column=self._column)

    @property
    def min_duration(self) -> timedelta:
        return timedelta(minutes=self.config.min_drag_minutes)

    def handle(self, event: PointerEvent, container: Optional[GridContainer]) -> Optional[DragSelection]:
        """Feed one pointer event; returns the selection when a drag commits."""

        if event.phase is PointerPhase.DOWN:
            if self._state is DragState.IDLE:
                self._begin(event, container)
            return None

        if self._state is not DragState.DRAGGING or event.pointer_id != self._pointer_id:
            return None

        self._extend(event, container)
        if event.phase is PointerPhase.UP:
            return self._finish(event)
        return None

    # ------------------------------------------------------------------
    def _begin(self, event: PointerEvent, container: Optional[GridContainer]) -> None:
        if container is None:
            return
        day = container.day_at(event.x)
        if day is None:
            return

        column = container.column_at(event.x)
        relative_y = container.relative_y(event.y)
        if self.occupancy is not None and self.occupancy.is_occupied(
            column, relative_y, container.x_fraction(event.x)
        ):
            return

        midnight = datetime.combine(day, time.min)
        start = min(
            time_at_pointer(midnight, event.y, container, self.config),
            midnight + timedelta(minutes=self._latest_start_minutes()),
        )
        self._state = DragState.DRAGGING
        self._pointer_id = event.pointer_id
        self._pressed_at = event.timestamp_ms
        self._day = day
        self._column = column
        self._start = start
        window_end = midnight + timedelta(minutes=self.config.window_end_minutes)
        self._end = min(start + timedelta(minutes=self.config.default_duration_minutes), window_end)
        self.logger.debug("Drag started at %s in column %d", start.isoformat(), column)

    def _latest_start_minutes(self) -> int:
        # A drag starting in the last slot must still end by the window end.
        step = max(self.config.grid_interval, self.config.min_drag_minutes)
        return max(self.config.window_end_minutes - step, self.config.window_start_minutes)

    def _extend(self, event: PointerEvent, container: Optional[GridContainer]) -> None:
        # Without a container the last known end is kept.
        if container is None or self._start is None or self._day is None:
            return
        pointed = time_at_pointer(datetime.combine(self._day, time.min), event.y, container, self.config)
        self._end = max(pointed, self._start + self.min_duration)

    def _finish(self, event: PointerEvent) -> Optional[DragSelection]:
        selection = self.selection
        elapsed = event.timestamp_ms - self._pressed_at
        self._reset()

        if selection is None:
            return None
        if selection.duration < self.min_duration:
            self.logger.debug("Discarding drag shorter than %s", self.min_duration)
            return None
        if self.max_gesture_ms is not None and elapsed > self.max_gesture_ms:
            self.logger.debug("Discarding drag held for %.0f ms", elapsed)
            return None

        self.logger.debug(
            "Committing drag %s - %s in column %d",
            selection.start.isoformat(),
            selection.end.isoformat(),
            selection.column,
        )
        self.on_create(selection)
        return selection

    def _reset(self) -> None:
        self._state = DragState.IDLE
        self._pointer_id = None
        self._pressed_at = 0.0
        self._day = None
        self._column = 0
        self._start = None
        self._end = None


__all__ = [
    "DragSelection",
    "DragState",
    "DragToCreate",
    "minutes_from_offset",
    "snap_minutes",
    "time_at_pointer",
]
