# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.dispatch import AddTask, DeleteTask, Refresh, SetFilter, ToggleTask, dispatch
from ..core.state import AppState
from ..tasks.errors import TaskValidationError
from ..tasks.task_models import Priority, ViewFilter, check_date, check_time

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string ("" when the renderer already drew) or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            logger.debug("Unknown command /%s", name)
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Anything else you type is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()

ADD_USAGE = "Usage: /add [-p low|medium|high] [-d YYYY-MM-DD] [-t HH:MM] [--no-date] text"


def default_due(state: AppState, now: datetime | None = None) -> tuple[str, str]:
    """Date and time a new task gets when the user does not pick any: today, now."""
    if not state.prefill_date:
        return "", ""
    now = now or datetime.now()
    return now.date().isoformat(), now.strftime("%H:%M")


def add_plain_text(state: AppState, text: str) -> str:
    date, time = default_due(state)
    dispatch(state, AddTask(text=text, priority=state.default_priority, date=date, time=time))
    return ""


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add buy milk
    /add -p low -d 2024-01-01 -t 09:00 buy milk
    /add --no-date buy milk
    """
    date, time = default_due(state)
    priority: Priority | str = state.default_priority
    words: list[str] = []

    it = iter(args)
    for arg in it:
        if words:
            words.append(arg)
            continue
        if arg in ("-p", "--priority", "-d", "--date", "-t", "--time"):
            value = next(it, None)
            if value is None:
                return ADD_USAGE
            if arg in ("-p", "--priority"):
                priority = value
            elif arg in ("-d", "--date"):
                try:
                    date = check_date(value)
                except TaskValidationError as e:
                    return f"{e}. {ADD_USAGE}"
            else:
                try:
                    time = check_time(value)
                except TaskValidationError as e:
                    return f"{e}. {ADD_USAGE}"
        elif arg == "--no-date":
            date, time = "", ""
        else:
            words.append(arg)

    dispatch(state, AddTask(text=" ".join(words), priority=priority, date=date, time=time))
    return ""


def cmd_toggle(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /toggle ID"
    dispatch(state, ToggleTask(task_id))
    return ""


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete ID"
    dispatch(state, DeleteTask(task_id))
    return ""


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter             -> show current filter
    /filter active      -> only incomplete tasks
    """
    if not args:
        return f"Current filter: {state.projector.filter.value}. Use /filter all|active|completed."
    try:
        flt = ViewFilter.parse(args[0])
    except TaskValidationError:
        return "Usage: /filter all|active|completed"
    dispatch(state, SetFilter(flt))
    return ""


def cmd_list(state: AppState, args: list[str]) -> str:
    dispatch(state, Refresh())
    return ""


def cmd_stats(state: AppState, args: list[str]) -> str:
    total, completed = state.current_view().stats
    return f"{total} tasks, {completed} completed"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text=ADD_USAGE.removeprefix("Usage: /add ") + " - add a task.")
registry.register("toggle", cmd_toggle, help_text="Mark a task done / not done: /toggle ID.", aliases=["done", "x"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete ID.", aliases=["rm", "del"])
registry.register("filter", cmd_filter, help_text="Show all, active or completed tasks.")
registry.register("list", cmd_list, help_text="Show tasks with the current filter.", aliases=["ls"])
registry.register("stats", cmd_stats, help_text="Show task counts.")
