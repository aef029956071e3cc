# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_cls
from datetime import datetime
from enum import StrEnum
from typing import Any, NamedTuple

from .errors import StorageCorruptionError, TaskValidationError


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: str | Priority) -> Priority:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise TaskValidationError(f"unknown priority: {raw!r}") from None


class ViewFilter(StrEnum):
    """
    Which tasks the view shows.

    Only narrows the derived view; never touches the collection itself.
    """

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | ViewFilter) -> ViewFilter:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise TaskValidationError(f"unknown filter: {raw!r}") from None


def check_date(raw: str | None) -> str:
    """Empty, or an ISO calendar date such as 2024-01-31. Raises TaskValidationError otherwise."""
    value = (raw or "").strip()
    if value:
        try:
            date_cls.fromisoformat(value)
        except ValueError:
            raise TaskValidationError(f"date must be YYYY-MM-DD, got {value!r}") from None
        if len(value) != 10:
            raise TaskValidationError(f"date must be YYYY-MM-DD, got {value!r}")
    return value


def check_time(raw: str | None) -> str:
    value = (raw or "").strip()
    if value:
        try:
            datetime.strptime(value, "%H:%M")
        except ValueError:
            raise TaskValidationError(f"time must be HH:MM, got {value!r}") from None
        if len(value) != 5:
            raise TaskValidationError(f"time must be HH:MM, got {value!r}")
    return value


class TaskStats(NamedTuple):
    total: int
    completed: int


@dataclass(slots=True)
class Task:
    """
    A single to-do item.

    Fields:
        id: creation timestamp in milliseconds (bumped to stay unique).
        text: trimmed, never empty.
        completed: the only field that changes after creation.
        priority: low / medium / high.
        date: "YYYY-MM-DD" or "" when no due date was given.
        time: "HH:MM" or ""; only shown alongside a date.
    """

    id: int
    text: str
    completed: bool = False
    priority: Priority = Priority.HIGH
    date: str = ""
    time: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "priority": self.priority.value,
            "date": self.date,
            "time": self.time,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Task:
        """
        Inverse of to_dict(); raises StorageCorruptionError on anything malformed.

        Lenient only where the browser format was: a missing "completed" means
        False and a missing or null date/time means "".
        """
        if not isinstance(data, dict):
            raise StorageCorruptionError(f"task entry is not an object: {data!r}")

        tid = data.get("id")
        # bool is an int subclass, reject it explicitly
        if not isinstance(tid, int) or isinstance(tid, bool):
            raise StorageCorruptionError(f"task id is not an integer: {tid!r}")

        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            raise StorageCorruptionError(f"task {tid} has no text")

        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise StorageCorruptionError(f"task {tid} has non-boolean completed flag")

        try:
            priority = Priority(data.get("priority"))
        except ValueError:
            raise StorageCorruptionError(
                f"task {tid} has unknown priority {data.get('priority')!r}"
            ) from None

        date = data.get("date") or ""
        time = data.get("time") or ""
        if not isinstance(date, str) or not isinstance(time, str):
            raise StorageCorruptionError(f"task {tid} has non-string date/time")

        return cls(
            id=tid,
            text=text,
            completed=completed,
            priority=priority,
            date=date,
            time=time,
        )
