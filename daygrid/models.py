"""Value types shared by the layout engine and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Generic, Optional, Protocol, TypeVar


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimeRange(Protocol):
    """Anything that occupies ``[start_time, end_time)`` on the grid."""

    @property
    def start_time(self) -> datetime: ...

    @property
    def end_time(self) -> datetime: ...


@dataclass(frozen=True)
class CalendarTask:
    """One plan or record occurrence as supplied by the task store.

    ``end_time <= start_time`` is accepted as-is; the layout engine treats such
    tasks as degenerate intervals rather than rejecting them.
    """

    id: str
    title: str
    start_time: datetime
    end_time: datetime
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    is_plan: bool = False
    is_record: bool = False
    satisfaction: Optional[int] = None
    focus_level: Optional[int] = None
    energy_level: Optional[int] = None

    def __post_init__(self) -> None:
        if self.is_plan and self.is_record:
            raise ValueError(f"Task {self.id!r} cannot be both a plan and a record.")

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    @property
    def kind(self) -> str:
        if self.is_plan:
            return "plan"
        if self.is_record:
            return "record"
        return "task"


@dataclass(frozen=True)
class TaskPair:
    """A plan and/or record rendered as a single unit in the split view."""

    id: str
    start_time: datetime
    end_time: datetime
    plan_task: Optional[CalendarTask] = None
    record_task: Optional[CalendarTask] = None
    has_overlap: bool = False

    def __post_init__(self) -> None:
        if self.plan_task is None and self.record_task is None:
            raise ValueError("A task pair needs a plan side, a record side, or both.")

    @property
    def title(self) -> str:
        side = self.plan_task or self.record_task
        return side.title if side is not None else ""

    @property
    def is_complete(self) -> bool:
        return self.plan_task is not None and self.record_task is not None


ItemT = TypeVar("ItemT")


@dataclass(frozen=True)
class Positioned(Generic[ItemT]):
    """Result of one layout pass for a single task or pair."""

    task: ItemT
    column: int
    total_columns: int
    start_minutes: int
    duration_minutes: int


PositionedTask = Positioned[CalendarTask]
PositionedPair = Positioned[TaskPair]


__all__ = [
    "CalendarTask",
    "Positioned",
    "PositionedPair",
    "PositionedTask",
    "Priority",
    "TaskPair",
    "TaskStatus",
    "TimeRange",
]
