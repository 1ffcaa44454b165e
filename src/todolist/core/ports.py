# src/todolist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by front ends.

Front ends depend on this Protocol instead of the concrete JSON store,
which keeps the store swappable and makes testing easier.
"""

from collections.abc import Iterable
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """Record store API consumed by the console front end (and any other caller)."""

    @property
    def path(self) -> str: ...

    def list_all(self) -> list[Task]: ...
    def add(self, description: str) -> int: ...
    def set_completion(self, task_id: int, completed: bool) -> bool: ...
    def delete(self, task_id: int) -> bool: ...
    def clear_completed(self) -> int: ...
    def save_all(self, tasks: Iterable[Task]) -> None: ...
