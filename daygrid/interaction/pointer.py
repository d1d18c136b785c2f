"""Input-agnostic pointer events and the geometry of the scrollable grid."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Sequence


class PointerPhase(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True)
class PointerEvent:
    """One mouse or touch sample in client coordinates."""

    x: float
    y: float
    phase: PointerPhase
    pointer_id: int = 0
    timestamp_ms: float = 0.0


@dataclass(frozen=True)
class GridContainer:
    """Where the time grid sits on screen and which day each column shows.

    ``top``/``left`` are the client coordinates of the grid's top-left corner,
    ``scroll_top`` is how far the grid is scrolled. ``column_width`` of
    ``None`` means a single day column spanning the whole grid.
    """

    days: Sequence[date]
    top: float = 0.0
    left: float = 0.0
    scroll_top: float = 0.0
    column_width: Optional[float] = None

    def relative_y(self, client_y: float) -> float:
        return client_y - self.top + self.scroll_top

    def column_at(self, client_x: float) -> int:
        if not self.column_width or len(self.days) <= 1:
            return 0
        index = int((client_x - self.left) // self.column_width)
        return min(max(index, 0), len(self.days) - 1)

    def x_fraction(self, client_x: float) -> float:
        """Horizontal position inside the pointed column, in percent."""

        if not self.column_width:
            return 0.0
        offset = client_x - self.left - self.column_at(client_x) * self.column_width
        return min(max(offset / self.column_width * 100.0, 0.0), 100.0)

    def day_at(self, client_x: float) -> Optional[date]:
        if not self.days:
            return None
        return self.days[self.column_at(client_x)]


__all__ = ["GridContainer", "PointerEvent", "PointerPhase"]
