# src/tasklist/core/dispatch.py

"""
Command interface between front ends and the core.

Flow for every command:
  mutation (TaskStore persists before returning) -> projection -> render.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..tasks.errors import TaskNotFoundError
from ..tasks.task_models import Priority, ViewFilter
from ..tasks.view import View
from .state import AppState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AddTask:
    text: str
    priority: Priority | str = Priority.HIGH
    date: str = ""
    time: str = ""


@dataclass(frozen=True, slots=True)
class ToggleTask:
    task_id: int


@dataclass(frozen=True, slots=True)
class DeleteTask:
    task_id: int


@dataclass(frozen=True, slots=True)
class SetFilter:
    filter: ViewFilter | str


@dataclass(frozen=True, slots=True)
class Refresh:
    """Re-render without changing anything."""


Command = AddTask | ToggleTask | DeleteTask | SetFilter | Refresh


def render(state: AppState) -> View:
    view = state.current_view()
    if state.renderer is not None:
        state.renderer.render(view)
    return view


def dispatch(state: AppState, command: Command) -> View:
    """
    Apply one command and re-render.

    A toggle on an unknown id means the caller rendered a stale view; it is
    logged and ignored. Validation problems on add were already reported
    through the store's input-error signal.
    """
    store = state.task_store

    if isinstance(command, AddTask):
        store.add(command.text, command.priority, command.date, command.time)
    elif isinstance(command, ToggleTask):
        try:
            store.toggle(command.task_id)
        except TaskNotFoundError:
            logger.warning("Toggle ignored: task id=%s not found (stale view?)", command.task_id)
    elif isinstance(command, DeleteTask):
        store.remove(command.task_id)
    elif isinstance(command, SetFilter):
        state.projector.set_filter(command.filter)
        logger.debug("Filter set to %s", state.projector.filter.value)
    elif isinstance(command, Refresh):
        pass
    else:
        raise TypeError(f"unsupported command: {command!r}")

    return render(state)
