# src/tasklist/tasks/task_store.py

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import replace

from ..core.ports import InputErrorSignal, KeyValueStorage
from ..storage.kv import TASKS_KEY
from .errors import StorageCorruptionError, TaskNotFoundError, TaskValidationError
from .task_models import Priority, Task, check_date, check_time

logger = logging.getLogger(__name__)


def serialize_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, separators=(",", ":"))


def deserialize_tasks(raw: str) -> list[Task]:
    """Parse the stored "tasks" value. Raises StorageCorruptionError on any malformed input."""
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise StorageCorruptionError(f"tasks value is not valid JSON: {e}") from e
    if data is None:
        return []
    if not isinstance(data, list):
        raise StorageCorruptionError("tasks value is not a JSON array")

    tasks = [Task.from_dict(item) for item in data]
    seen: set[int] = set()
    for t in tasks:
        if t.id in seen:
            raise StorageCorruptionError(f"duplicate task id {t.id}")
        seen.add(t.id)
    return tasks


class TaskStore:
    """
    Sole owner of the task collection.

    Newest tasks come first. Every successful mutation is followed by a full
    rewrite of the "tasks" key before the method returns, so storage always
    mirrors the in-memory list.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        on_input_error: InputErrorSignal | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._on_input_error = on_input_error
        self._clock = clock
        self._tasks: list[Task] = []
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- lifecycle ----

    def initialize(self) -> tuple[Task, ...]:
        raw = self._storage.get_item(TASKS_KEY)
        tasks: list[Task] = []
        if raw is not None:
            try:
                tasks = deserialize_tasks(raw)
            except StorageCorruptionError as e:
                logger.warning("Stored tasks are malformed (%s); starting with an empty list.", e)
                tasks = []

        self._tasks = tasks
        self._last_id = max((t.id for t in tasks), default=0)
        logger.info("TaskStore ready total=%s", len(self._tasks))
        return self.snapshot()

    def close(self) -> None:
        self._commit(list(self._tasks))

    # ---- low-level helpers ----

    def _commit(self, tasks: list[Task]) -> None:
        # write first; memory only moves on once storage holds the new list
        self._storage.set_item(TASKS_KEY, serialize_tasks(tasks))
        self._tasks = tasks

    def _next_id(self) -> int:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def _reject(self, error: TaskValidationError) -> tuple[Task, ...]:
        logger.debug("Add rejected: %s", error)
        if self._on_input_error is not None:
            self._on_input_error(error)
        return self.snapshot()

    def _find(self, task_id: int) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    # ---- public API ----

    def snapshot(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: int) -> Task:
        task = self._find(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def add(
        self,
        text: str,
        priority: Priority | str = Priority.HIGH,
        date: str | None = "",
        time: str | None = "",
    ) -> tuple[Task, ...]:
        """
        Prepend a new task and persist.

        Empty text (after trimming), an unknown priority or a malformed
        date/time is not raised to the caller: the input-error signal fires
        and the collection comes back unchanged.
        """
        clean = (text or "").strip()
        if not clean:
            return self._reject(TaskValidationError("task text cannot be empty"))
        try:
            prio = Priority.parse(priority)
            due_date = check_date(date)
            due_time = check_time(time)
        except TaskValidationError as e:
            return self._reject(e)

        task = Task(
            id=self._next_id(),
            text=clean,
            completed=False,
            priority=prio,
            date=due_date,
            time=due_time,
        )
        self._commit([task, *self._tasks])
        logger.debug("Task added id=%s priority=%s date=%s", task.id, prio.value, task.date)
        return self.snapshot()

    def toggle(self, task_id: int) -> tuple[Task, ...]:
        task = self.get(task_id)
        # replace rather than mutate so earlier snapshots stay as they were
        flipped = replace(task, completed=not task.completed)
        self._commit([flipped if t.id == task_id else t for t in self._tasks])
        logger.debug("Task toggled id=%s completed=%s", task_id, flipped.completed)
        return self.snapshot()

    def remove(self, task_id: int) -> tuple[Task, ...]:
        before = len(self._tasks)
        self._commit([t for t in self._tasks if t.id != task_id])
        if len(self._tasks) == before:
            logger.debug("Remove of absent task id=%s ignored", task_id)
        else:
            logger.debug("Task removed id=%s", task_id)
        return self.snapshot()
