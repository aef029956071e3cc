# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from datetime import date as date_cls
from typing import TextIO

from ..cli.commands import add_plain_text
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.errors import TaskValidationError
from ..tasks.task_models import Priority, Task
from ..tasks.view import View, visible

logger = logging.getLogger(__name__)

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
PRIORITY_TAGS = {Priority.HIGH: "[H]", Priority.MEDIUM: "[M]", Priority.LOW: "[L]"}


def format_due(date: str, time: str = "") -> str:
    """
    "2024-01-01", "09:00" -> "1 Jan 2024 • 09:00".

    No date means nothing is shown, even when a time is set. A date that
    does not parse is shown as typed.
    """
    if not date:
        return ""
    try:
        d = date_cls.fromisoformat(date)
        out = f"{d.day} {MONTHS[d.month - 1]} {d.year}"
    except ValueError:
        out = date
    if time:
        out += f" • {time}"
    return out


def format_task(task: Task) -> str:
    box = "[x]" if task.completed else "[ ]"
    line = f"{PRIORITY_TAGS[task.priority]} {box} {task.id}  {task.text}"
    due = format_due(task.date, task.time)
    if due:
        line += f"  ({due})"
    return line


class ConsoleRenderer:
    """Draws a View as plain text lines."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def render(self, view: View) -> None:
        total, completed = view.stats
        self._print(f"-- {view.filter.value} -- {total} tasks, {completed} completed")
        if view.is_empty:
            self._print("   No tasks yet!")
            self._print("   Add your first task")
        else:
            for task in visible(view.tasks):
                self._print(format_task(task))
        self._print()

    def input_error(self, error: TaskValidationError) -> None:
        msg = str(error)
        self._print(f"! {msg[:1].upper()}{msg[1:]}.")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (filter=%s).", state.projector.filter.value)
    print("Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    command_registry.handle(state, "/list")

    while True:
        try:
            user_input = input("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input)
            if reply is None:
                reply = add_plain_text(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            print(reply)

    logger.info("Console connector finished.")
