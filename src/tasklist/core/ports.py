# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage backends and front ends swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.errors import TaskValidationError
    from ..tasks.view import View


class KeyValueStorage(Protocol):
    """
    String-valued durable key-value store (browser localStorage semantics).

    Keys in use:
    - "tasks"    -> JSON array of task objects (owned by TaskStore)
    - "darkMode" -> "true" / "false" (owned by the theme layer, never touched here)
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class Renderer(Protocol):
    """Output side: receives the projected tasks (or the empty marker) plus stats."""

    def render(self, view: View) -> None: ...


InputErrorSignal = Callable[["TaskValidationError"], None]
# Raised on rejected input so the front end can flag the input field.
