"""Convert layout results into rectangles on the time grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..models import Positioned
from .pairing import calculate_task_pair_layout

# Narrowest share of the day column an item keeps once its columns are capped.
MIN_EVENT_WIDTH_PERCENT: Final[float] = 45.0

# (container width below which the cap applies, columns allowed)
WIDTH_COLUMN_LIMITS: Final[tuple[tuple[float, int], ...]] = ((400, 2), (600, 3), (800, 4))


@dataclass(frozen=True)
class Geometry:
    """Rectangle of one rendered item.

    ``top`` and ``height`` are pixels from the start of the visible window;
    ``left`` and ``width`` are percentages of the day column and are ``None``
    for full-width items.
    """

    top: float
    height: float
    left: Optional[float] = None
    width: Optional[float] = None
    z_index: int = 1

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def css(self) -> dict[str, object]:
        style: dict[str, object] = {
            "top": _px(self.top),
            "height": _px(self.height),
            "zIndex": self.z_index,
        }
        if self.left is not None:
            style["left"] = _percent(self.left)
        if self.width is not None:
            style["width"] = _percent(self.width)
        return style


def max_columns_for_width(container_width_px: Optional[float]) -> Optional[int]:
    """How many side-by-side columns fit in a day column this wide.

    ``None`` (unknown width) and wide containers have no limit.
    """

    if container_width_px is None:
        return None
    for threshold, columns in WIDTH_COLUMN_LIMITS:
        if container_width_px < threshold:
            return columns
    return None


def task_geometry(
    start_minutes: float,
    duration_minutes: float,
    config: LayoutConfig = DEFAULT_CONFIG,
    *,
    column: Optional[int] = None,
    total_columns: Optional[int] = None,
) -> Geometry:
    """Map a start/duration in minutes to a rectangle.

    ``top`` is measured from ``config.day_start_hour``. The height never drops
    below ``config.min_event_height_px`` so short items stay visible and
    clickable. When ``config.container_width_px`` limits the column count,
    items in the overflowing columns share the last allowed column.
    """

    top = (start_minutes - config.window_start_minutes) / 60 * config.hour_height
    height = max(duration_minutes / 60 * config.hour_height, config.min_event_height_px)
    if column is None:
        return Geometry(top=top, height=height)

    total = total_columns if total_columns is not None else column + 1
    span = calculate_task_pair_layout(column, total, config.column_gutter_percent)
    left, width = span.left, span.width

    limit = max_columns_for_width(config.container_width_px)
    if limit is not None and total > limit:
        width = max(width * limit / total, MIN_EVENT_WIDTH_PERCENT)
        left = min(column, limit - 1) * (100.0 / limit) + config.column_gutter_percent / 2
    return Geometry(top=top, height=height, left=left, width=width, z_index=column + 1)


def positioned_geometry(positioned: Positioned, config: LayoutConfig = DEFAULT_CONFIG) -> Geometry:
    return task_geometry(
        positioned.start_minutes,
        positioned.duration_minutes,
        config,
        column=positioned.column,
        total_columns=positioned.total_columns,
    )


def _px(value: float) -> str:
    return f"{round(value, 2):g}px"


def _percent(value: float) -> str:
    return f"{round(value, 4):g}%"


__all__ = [
    "Geometry",
    "MIN_EVENT_WIDTH_PERCENT",
    "max_columns_for_width",
    "positioned_geometry",
    "task_geometry",
]
