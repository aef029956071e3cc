# src/tasklist/tasks/errors.py

from __future__ import annotations


class TaskListError(Exception):
    """Base class for task list failures. None of them is fatal."""


class TaskValidationError(TaskListError, ValueError):
    """Rejected input on add (empty text, unknown priority or filter)."""


class TaskNotFoundError(TaskListError, LookupError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task not found: id={task_id}")
        self.task_id = task_id


class StorageCorruptionError(TaskListError):
    """Persisted tasks could not be parsed into the expected structure."""
