# src/tasklist/tasks/view.py

"""
Read-only projections of the task collection.

Nothing here mutates the collection or the tasks in it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from .task_models import Task, TaskStats, ViewFilter


class EmptyView:
    """Marker for "nothing to show" so the renderer can draw a placeholder."""

    _instance: EmptyView | None = None

    def __new__(cls) -> EmptyView:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __len__(self) -> int:
        return 0

    def __iter__(self):
        return iter(())

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY: Final = EmptyView()

Projection = tuple[Task, ...] | EmptyView


def project(collection: Sequence[Task], view_filter: ViewFilter | str = ViewFilter.ALL) -> Projection:
    flt = ViewFilter.parse(view_filter)
    if flt is ViewFilter.ACTIVE:
        out = tuple(t for t in collection if not t.completed)
    elif flt is ViewFilter.COMPLETED:
        out = tuple(t for t in collection if t.completed)
    else:
        out = tuple(collection)
    return out if out else EMPTY


def stats(collection: Sequence[Task]) -> TaskStats:
    return TaskStats(
        total=len(collection),
        completed=sum(1 for t in collection if t.completed),
    )


def visible(projection: Projection) -> tuple[Task, ...]:
    return () if projection is EMPTY else tuple(projection)


@dataclass(frozen=True, slots=True)
class View:
    """Everything a renderer needs for one redraw."""

    filter: ViewFilter
    tasks: Projection
    stats: TaskStats

    @property
    def is_empty(self) -> bool:
        return self.tasks is EMPTY


class ViewProjector:
    """Holds the current filter selection and turns a collection into a View."""

    def __init__(self, view_filter: ViewFilter | str = ViewFilter.ALL) -> None:
        self._filter = ViewFilter.parse(view_filter)

    @property
    def filter(self) -> ViewFilter:
        return self._filter

    def set_filter(self, view_filter: ViewFilter | str) -> ViewFilter:
        self._filter = ViewFilter.parse(view_filter)
        return self._filter

    def project(self, collection: Sequence[Task]) -> Projection:
        return project(collection, self._filter)

    def view(self, collection: Sequence[Task]) -> View:
        return View(filter=self._filter, tasks=self.project(collection), stats=stats(collection))
