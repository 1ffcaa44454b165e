# src/todolist/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.state import AppState
from .task_models import Task
from .task_store import TaskStoreError

logger = logging.getLogger(__name__)


def load_working_copy(state: AppState) -> list[Task]:
    """Replace the working copy with the current file content."""
    state.tasks = state.task_store.list_all()
    logger.info("Loaded %d tasks into working copy", len(state.tasks))
    return state.tasks


def add_task(state: AppState, description: str) -> Task:
    """
    Persist a new task, then mirror it into the working copy.
    Raises ValueError on blank input and TaskStoreError on I/O failure;
    the working copy is untouched in both cases.
    """
    description = (description or "").strip()
    if not description:
        raise ValueError("description is required")
    task_id = state.task_store.add(description)
    task = Task(id=task_id, description=description, completed=False)
    state.tasks.append(task)
    return task


def set_task_completion(state: AppState, task_id: int, completed: bool) -> Task | None:
    """
    Toggle a task in the working copy first, then in the store.

    If the store fails, the working copy flag is reverted and the error
    is re-raised. Unsaved tasks only change in memory.
    """
    task = state.find_task(task_id)
    if task is None:
        logger.warning("Working copy has no task id=%s", task_id)
        return None

    previous = task.completed
    task.completed = completed
    if not task.is_saved:
        return task

    try:
        found = state.task_store.set_completion(task.id, completed)
    except TaskStoreError:
        task.completed = previous
        raise

    if not found:
        logger.warning("Task id=%s is in the working copy but not in the file", task_id)
    return task


def delete_task(state: AppState, task_id: int) -> Task | None:
    task = state.find_task(task_id)
    state.task_store.delete(task_id)
    if task is not None:
        state.tasks.remove(task)
    return task


def clear_completed(state: AppState) -> int:
    """Clear completed tasks in the store and drop them from the working copy."""
    removed = state.task_store.clear_completed()
    state.tasks = [t for t in state.tasks if not t.completed]
    return removed


def flush_working_copy(state: AppState) -> None:
    """
    Write the whole working copy back to the file (shutdown path).
    Unsaved tasks get an id from the store first, so save_all accepts them.
    """
    if not state.flush_on_exit:
        logger.debug("Flush on exit disabled; working copy not saved.")
        return
    for task in state.tasks:
        if not task.is_saved:
            task.id = state.task_store.add(task.description)
    state.task_store.save_all(state.tasks)
    logger.info("Final save of %d tasks completed", len(state.tasks))
