"""Spatial index of rendered task rectangles, one lane list per day column."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol

from ..layout.geometry import Geometry


class PlacedItem(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def geometry(self) -> Geometry: ...


@dataclass(frozen=True)
class _Cell:
    task_id: str
    top: float
    bottom: float
    left: float
    right: float


class OccupancyIndex:
    """Answer "which task is drawn at this point" without asking the renderer."""

    def __init__(self) -> None:
        self._columns: Dict[int, List[_Cell]] = {}

    @classmethod
    def from_columns(cls, columns: Iterable[Iterable[PlacedItem]]) -> "OccupancyIndex":
        index = cls()
        for column, items in enumerate(columns):
            for item in items:
                index.add(column, item.id, item.geometry)
        return index

    def add(self, column: int, task_id: str, geometry: Geometry) -> None:
        left = geometry.left if geometry.left is not None else 0.0
        width = geometry.width if geometry.width is not None else 100.0
        self._columns.setdefault(column, []).append(
            _Cell(
                task_id=task_id,
                top=geometry.top,
                bottom=geometry.bottom,
                left=left,
                right=left + width,
            )
        )

    def task_at(self, column: int, y: float, x_percent: Optional[float] = None) -> Optional[str]:
        """Return the id of the top-most task covering ``y`` (and ``x_percent``)."""

        hit: Optional[str] = None
        for cell in self._columns.get(column, ()):
            if not cell.top <= y < cell.bottom:
                continue
            if x_percent is not None and not cell.left <= x_percent < cell.right:
                continue
            hit = cell.task_id
        return hit

    def is_occupied(self, column: int, y: float, x_percent: Optional[float] = None) -> bool:
        return self.task_at(column, y, x_percent) is not None

    def __len__(self) -> int:
        return sum(len(cells) for cells in self._columns.values())


__all__ = ["OccupancyIndex", "PlacedItem"]
