# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.cli.bootstrap import create_initial_state
from tasklist.core.state import AppState
from tasklist.storage.kv import MemoryStorage
from tasklist.tasks.task_store import TaskStore

from .fakes import InputErrorSink, RecordingRenderer, StepClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_path=tmp_path / "storage.json",
        default_priority="high",
        default_filter="all",
        prefill_date=False,
    )


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def input_errors() -> InputErrorSink:
    return InputErrorSink()


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def store(storage: MemoryStorage, input_errors: InputErrorSink, clock: StepClock) -> TaskStore:
    s = TaskStore(storage, on_input_error=input_errors, clock=clock)
    s.initialize()
    return s


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    storage: MemoryStorage,
    renderer: RecordingRenderer,
    input_errors: InputErrorSink,
) -> AppState:
    """
    AppState wired with in-memory storage and a recording renderer.

    TaskStore and ViewProjector are the real ones; their behaviour is what we test.
    """
    return create_initial_state(
        settings=settings,
        storage=storage,
        renderer=renderer,
        on_input_error=input_errors,
    )
