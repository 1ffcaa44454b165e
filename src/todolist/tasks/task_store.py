# src/todolist/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStoreError(RuntimeError):
    """Base class for record store failures."""


class TaskStoreStartupError(TaskStoreError):
    """The backing file exists but cannot be read as an array of task records."""


class TaskStoreIOError(TaskStoreError):
    """A read or write failed during an operation; the operation was aborted."""


class TaskStore:
    """
    Single-file JSON task store.

    The file holds one top-level array of {"id", "description", "completed"}
    objects. Every operation follows the same cycle:
    - load the whole file
    - mutate the in-memory list
    - write the whole file back (pretty-printed, stable key order)

    Ids come from an in-memory counter seeded with max(id) + 1 at startup.
    The counter is never persisted and never goes backwards, so ids are not
    reused after deletions.

    Thread-safety:
    - none; concurrent callers race on the whole file (last write wins)
    """

    def __init__(self, path: str | Path = "tasks.json", *, indent: int = 2) -> None:
        self._path = Path(path)
        self._indent = indent
        self._next_id = 1

        try:
            if not self._path.exists():
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._write_records([])
                logger.info("Created new task file %s", self._path)
                existing: list[Task] = []
            else:
                existing = self._read_records()
        except (OSError, ValueError) as e:
            logger.exception("Failed to initialize task file %s", self._path)
            raise TaskStoreStartupError(f"cannot initialize task file {self._path}: {e}") from e

        self._next_id = max((t.id for t in existing), default=0) + 1
        logger.info(
            "TaskStore ready path=%s total=%s next_id=%s",
            self._path,
            len(existing),
            self._next_id,
        )

    # ---- low-level helpers ----

    @staticmethod
    def _parse(text: str) -> list[Task]:
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError(f"task file must contain a JSON array, got {type(data).__name__}")

        tasks = [Task.from_dict(item) for item in data]

        seen: set[int] = set()
        for t in tasks:
            if t.id < 1:
                raise ValueError(f"persisted task has non-positive id {t.id}")
            if t.id in seen:
                raise ValueError(f"duplicate task id {t.id}")
            seen.add(t.id)
        return tasks

    def _read_records(self) -> list[Task]:
        return self._parse(self._path.read_text("utf-8"))

    def _write_records(self, tasks: Iterable[Task]) -> int:
        payload = [t.to_dict() for t in tasks]
        text = json.dumps(payload, ensure_ascii=False, indent=self._indent)

        tmp = self._path.with_suffix(".tmp")
        try:
            tmp.write_text(text + "\n", "utf-8")
            os.replace(tmp, self._path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        logger.debug("Saved %d tasks to %s", len(payload), self._path)
        return len(payload)

    def _fail(self, action: str, e: Exception) -> TaskStoreIOError:
        logger.exception("Failed to %s (path=%s)", action, self._path)
        return TaskStoreIOError(f"failed to {action}: {e}")

    # ---- public API ----

    @property
    def path(self) -> str:
        """Absolute path of the backing file."""
        return str(self._path.resolve())

    @property
    def next_id(self) -> int:
        return self._next_id

    def list_all(self) -> list[Task]:
        try:
            tasks = self._read_records()
        except (OSError, ValueError) as e:
            raise self._fail("read tasks", e) from e
        logger.debug("Retrieved %d tasks from %s", len(tasks), self._path)
        return tasks

    def count(self) -> int:
        return len(self.list_all())

    def add(self, description: str) -> int:
        """Append a new pending task and return its id. The description is stored as given."""
        try:
            tasks = self._read_records()
            task_id = self._next_id
            self._next_id += 1
            tasks.append(Task(id=task_id, description=description, completed=False))
            self._write_records(tasks)
        except (OSError, ValueError) as e:
            raise self._fail(f"add task {description!r}", e) from e

        logger.info("Task added id=%s", task_id)
        return task_id

    def set_completion(self, task_id: int, completed: bool) -> bool:
        """
        Set the completed flag of one task.

        Returns False (after logging a warning) when no task has this id;
        nothing is written in that case.
        """
        try:
            tasks = self._read_records()
            target = next((t for t in tasks if t.id == task_id), None)
            if target is None:
                logger.warning("No task found with id=%s", task_id)
                return False
            target.completed = bool(completed)
            self._write_records(tasks)
        except (OSError, ValueError) as e:
            raise self._fail(f"update completion of task {task_id}", e) from e

        logger.info("Task id=%s completed=%s", task_id, bool(completed))
        return True

    def delete(self, task_id: int) -> bool:
        """Remove the task with this id. Returns False if there was none."""
        try:
            tasks = self._read_records()
            idx = next((i for i, t in enumerate(tasks) if t.id == task_id), None)
            if idx is None:
                logger.warning("No task found with id=%s", task_id)
                return False
            del tasks[idx]
            self._write_records(tasks)
        except (OSError, ValueError) as e:
            raise self._fail(f"delete task {task_id}", e) from e

        logger.info("Task id=%s deleted", task_id)
        return True

    def clear_completed(self) -> int:
        """Remove every completed task; the file is rewritten even if none matched."""
        try:
            tasks = self._read_records()
            remaining = [t for t in tasks if not t.completed]
            self._write_records(remaining)
        except (OSError, ValueError) as e:
            raise self._fail("clear completed tasks", e) from e

        removed = len(tasks) - len(remaining)
        logger.info("Cleared %d completed tasks", removed)
        return removed

    def save_all(self, tasks: Iterable[Task]) -> None:
        """
        Overwrite the file with exactly `tasks`, ignoring its current content.

        Records must already carry persistent ids (>= 1, unique). The counter
        is moved past the highest saved id so later adds cannot collide.
        """
        records = list(tasks)
        seen: set[int] = set()
        for t in records:
            if t.id < 1:
                raise ValueError(f"cannot save task without a persistent id: {t.description!r}")
            if t.id in seen:
                raise ValueError(f"duplicate task id {t.id}")
            seen.add(t.id)

        try:
            self._write_records(records)
        except (OSError, ValueError) as e:
            raise self._fail("save all tasks", e) from e

        self._next_id = max(self._next_id, max(seen, default=0) + 1)
        logger.info("Saved all tasks: %d records to %s", len(records), self._path)
