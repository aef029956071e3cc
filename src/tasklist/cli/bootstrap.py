# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage, TaskStore, ViewProjector and the renderer into AppState,
- restores the task list at startup and saves it at shutdown.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import InputErrorSignal, KeyValueStorage, Renderer
from ..core.state import AppState
from ..storage.kv import JsonFileStorage
from ..tasks.errors import TaskValidationError
from ..tasks.task_models import Priority, ViewFilter
from ..tasks.task_store import TaskStore
from ..tasks.view import ViewProjector

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def _setting_or(parse, raw, fallback, name: str):
    try:
        return parse(raw)
    except TaskValidationError:
        logger.warning("Invalid %s setting %r; using %s.", name, raw, fallback.value)
        return fallback


def create_initial_state(
    *,
    settings=None,
    storage: KeyValueStorage | None = None,
    renderer: Renderer | None = None,
    on_input_error: InputErrorSignal | None = None,
) -> AppState:
    """
    Create AppState from the provided settings and load the saved tasks.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). If storage is None,
    a JsonFileStorage at settings.storage_path is used.
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = JsonFileStorage(settings.storage_path)

    task_store = TaskStore(storage, on_input_error=on_input_error)
    task_store.initialize()

    view_filter = _setting_or(
        ViewFilter.parse, getattr(settings, "default_filter", "all"), ViewFilter.ALL, "default_filter"
    )
    priority = _setting_or(
        Priority.parse, getattr(settings, "default_priority", "high"), Priority.HIGH, "default_priority"
    )

    return AppState(
        settings=settings,
        task_store=task_store,
        projector=ViewProjector(view_filter),
        renderer=renderer,
        default_priority=priority,
        prefill_date=bool(getattr(settings, "prefill_date", True)),
    )


def shutdown(state: AppState) -> None:
    """Best-effort final save (no exceptions should escape)."""
    try:
        state.task_store.close()
    except Exception:
        logger.exception("Failed to save tasks on shutdown.")
