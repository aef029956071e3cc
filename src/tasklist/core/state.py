# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import Priority
from ..tasks.task_store import TaskStore
from ..tasks.view import View, ViewProjector
from .ports import Renderer


@dataclass
class AppState:
    """
    Process-wide state for one session.

    The task list belongs to task_store and the filter selection to
    projector; nothing else keeps its own copy.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskStore
    projector: ViewProjector

    renderer: Renderer | None = None
    default_priority: Priority = Priority.HIGH
    prefill_date: bool = True

    def current_view(self) -> View:
        return self.projector.view(self.task_store.snapshot())
