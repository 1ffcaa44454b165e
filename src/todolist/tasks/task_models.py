# src/todolist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

UNSAVED_ID = -1
# Placeholder id for a task that the store has not assigned yet.


@dataclass(slots=True)
class Task:
    id: int
    description: str
    completed: bool = False

    @classmethod
    def transient(cls, description: str, completed: bool = False) -> Task:
        return cls(id=UNSAVED_ID, description=description, completed=completed)

    @property
    def is_saved(self) -> bool:
        return self.id != UNSAVED_ID

    def to_dict(self) -> dict[str, Any]:
        # Key order is part of the on-disk format.
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """
        Build a Task from one decoded JSON element.

        Raises ValueError when the element is not a record:
        - not an object
        - missing or non-integer "id"
        - non-string "description" / non-boolean "completed"
        Missing "description" / "completed" fall back to "" / False.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"task record must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise ValueError(f"task record has invalid id: {task_id!r}")

        description = raw.get("description", "")
        if not isinstance(description, str):
            raise ValueError(f"task {task_id} has non-string description")

        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"task {task_id} has non-boolean completed flag")

        return cls(id=task_id, description=description, completed=completed)

    def __str__(self) -> str:
        return f"{self.description} ({'Completed' if self.completed else 'Pending'})"
