# src/todolist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStoreError

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

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
        Returns a reply string or None if not a command.
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
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except TaskStoreError as e:
            # Store already logged the traceback; the user only needs the reason.
            return f"Storage error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def format_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"[{mark}] {task.id:>3}  {task.description}"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    if not state.tasks:
        return "No tasks. Type a description (or /add <text>) to create one."
    lines = [format_task(t) for t in state.tasks]
    done = sum(1 for t in state.tasks if t.completed)
    lines.append(f"{len(state.tasks)} tasks, {done} completed.")
    return "\n".join(lines)


def cmd_add(state: AppState, args: list[str]) -> str:
    description = " ".join(args).strip()
    if not description:
        return "Usage: /add <description>"
    task = task_api.add_task(state, description)
    return f"Added task {task.id}: {task.description}"


def _set_completion(state: AppState, args: list[str], completed: bool, usage: str) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return usage
    task = task_api.set_task_completion(state, task_id, completed)
    if task is None:
        return f"No task with id {task_id}."
    return format_task(task)


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_completion(state, args, True, "Usage: /done <id>")


def cmd_undo(state: AppState, args: list[str]) -> str:
    return _set_completion(state, args, False, "Usage: /undo <id>")


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    task = task_api.delete_task(state, task_id)
    if task is None:
        return f"No task with id {task_id}."
    return f"Deleted task {task.id}: {task.description}"


def cmd_clear(state: AppState, args: list[str]) -> str:
    removed = task_api.clear_completed(state)
    if removed == 0:
        return "No completed tasks found to clear."
    return f"Cleared {removed} completed tasks."


def cmd_path(state: AppState, args: list[str]) -> str:
    return state.task_store.path


def cmd_exit(state: AppState, args: list[str]) -> str:
    # The console loop intercepts /exit before the registry; other callers just get a hint.
    return "Use /exit or /quit at the console prompt to save and quit."


def cmd_status(state: AppState, args: list[str]) -> str:
    flush = "ON" if state.flush_on_exit else "OFF"
    return (
        "Status:\n"
        f"  Task file: {state.task_store.path}\n"
        f"  Tasks in working copy: {len(state.tasks)}\n"
        f"  Save on exit: {flush}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show all tasks.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <description>.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("undo", cmd_undo, help_text="Mark a task pending again: /undo <id>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all completed tasks.")
registry.register("path", cmd_path, help_text="Show the task file location.")
registry.register("status", cmd_status, help_text="Show task file and working copy status.")
registry.register("exit", cmd_exit, help_text="Save the task list and quit (also /quit).", aliases=["quit"])
