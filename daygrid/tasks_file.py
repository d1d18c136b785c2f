"""Load calendar tasks from the JSON form of the task store's input contract."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Mapping, Optional

from .models import CalendarTask, Priority, TaskStatus

logger = logging.getLogger(__name__)


class TaskFileError(RuntimeError):
    """Raised when a task document cannot be read or normalized."""


def load_tasks(path: str | Path) -> List[CalendarTask]:
    """Read tasks from ``path``.

    The document is either a list of task objects or an object with a
    ``"tasks"`` list. Keys follow the store's camelCase contract (``start``,
    ``end``, ``isPlan``, ``isRecord``, ``focusLevel`` ...).
    """

    source = Path(path)
    try:
        document = json.loads(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TaskFileError(f"Unable to read task file {source}") from exc
    except json.JSONDecodeError as exc:
        raise TaskFileError(f"Task file {source.name!r} is not valid JSON: {exc}") from exc
    return parse_tasks(document)


def parse_tasks(document: Any) -> List[CalendarTask]:
    items = document.get("tasks") if isinstance(document, Mapping) else document
    if not isinstance(items, list):
        raise TaskFileError("Task document must be a list or contain a 'tasks' list.")

    tasks: List[CalendarTask] = []
    for position, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise TaskFileError(f"Task #{position} is not an object.")
        try:
            tasks.append(normalize_task(item))
        except (KeyError, ValueError) as exc:
            raise TaskFileError(f"Task #{position} is malformed: {exc}") from exc

    awareness = {
        moment.tzinfo is not None for task in tasks for moment in (task.start_time, task.end_time)
    }
    if len(awareness) > 1:
        raise TaskFileError(
            "Task document mixes timestamps with and without a UTC offset; use one form throughout."
        )
    logger.debug("Loaded %d tasks", len(tasks))
    return tasks


def normalize_task(item: Mapping[str, Any]) -> CalendarTask:
    return CalendarTask(
        id=str(item["id"]),
        title=str(item.get("title") or "Untitled Task"),
        start_time=_parse_datetime(_first(item, "start", "startTime")),
        end_time=_parse_datetime(_first(item, "end", "endTime")),
        status=TaskStatus(item.get("status", TaskStatus.PENDING.value)),
        priority=Priority(item.get("priority", Priority.MEDIUM.value)),
        is_plan=bool(item.get("isPlan", False)),
        is_record=bool(item.get("isRecord", False)),
        satisfaction=_optional_int(item.get("satisfaction")),
        focus_level=_optional_int(item.get("focusLevel")),
        energy_level=_optional_int(item.get("energyLevel")),
    )


def dump_task(task: CalendarTask) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": task.id,
        "title": task.title,
        "start": task.start_time.isoformat(),
        "end": task.end_time.isoformat(),
        "status": task.status.value,
        "priority": task.priority.value,
        "isPlan": task.is_plan,
        "isRecord": task.is_record,
    }
    for key, value in (
        ("satisfaction", task.satisfaction),
        ("focusLevel", task.focus_level),
        ("energyLevel", task.energy_level),
    ):
        if value is not None:
            payload[key] = value
    return payload


def _first(item: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in item:
            return item[key]
    raise KeyError(keys[0])


def _parse_datetime(value: Any) -> datetime:
    text = str(value)
    cleaned = text[:-1] + "+00:00" if text.endswith("Z") else text
    return datetime.fromisoformat(cleaned)


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


__all__ = ["TaskFileError", "dump_task", "load_tasks", "normalize_task", "parse_tasks"]
