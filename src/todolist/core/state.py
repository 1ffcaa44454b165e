# src/todolist/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.task_models import Task
from .ports import TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskRepo

    # Front-end working copy; flushed with task_store.save_all() at shutdown.
    tasks: list[Task] = field(default_factory=list)
    flush_on_exit: bool = True

    def find_task(self, task_id: int) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)
