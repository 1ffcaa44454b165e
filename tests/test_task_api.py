# tests/test_task_api.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from todolist.core.state import AppState
from todolist.tasks import task_api
from todolist.tasks.task_models import Task
from todolist.tasks.task_store import TaskStoreIOError


def test_working_copy_mirrors_store_operations(state: AppState) -> None:
    a = task_api.add_task(state, "buy milk")
    b = task_api.add_task(state, "walk dog")
    assert state.tasks == state.task_store.list_all() == [a, b]

    task_api.set_task_completion(state, a.id, True)
    assert state.find_task(a.id).completed is True
    assert state.task_store.list_all()[0].completed is True

    assert task_api.clear_completed(state) == 1
    assert state.tasks == state.task_store.list_all() == [b]

    assert task_api.delete_task(state, b.id) == b
    assert state.tasks == state.task_store.list_all() == []


def test_add_blank_leaves_working_copy_and_file_untouched(state: AppState) -> None:
    with pytest.raises(ValueError):
        task_api.add_task(state, "   ")
    with pytest.raises(ValueError):
        task_api.add_task(state, "")
    assert state.tasks == []
    assert state.task_store.list_all() == []


def test_add_strips_user_input(state: AppState) -> None:
    task = task_api.add_task(state, "  buy milk ")
    assert task.description == "buy milk"
    assert state.task_store.list_all() == [Task(id=task.id, description="buy milk")]


def test_completion_is_rolled_back_when_store_fails(state: AppState, monkeypatch) -> None:
    task = task_api.add_task(state, "a")

    def fail(task_id, completed):
        raise TaskStoreIOError("disk gone")

    monkeypatch.setattr(state.task_store, "set_completion", fail)

    with pytest.raises(TaskStoreIOError):
        task_api.set_task_completion(state, task.id, True)
    assert state.find_task(task.id).completed is False


def test_unknown_id_returns_none(state: AppState) -> None:
    task_api.add_task(state, "a")
    assert task_api.set_task_completion(state, 42, True) is None
    assert task_api.delete_task(state, 42) is None
    assert len(state.tasks) == 1


def test_flush_persists_uncaptured_edits(state: AppState, settings) -> None:
    task = task_api.add_task(state, "typo")
    # Description edits have no dedicated store call; only the final flush saves them.
    task.description = "fixed"

    task_api.flush_working_copy(state)

    data = json.loads(Path(settings.tasks_path).read_text("utf-8"))
    assert data == [{"id": task.id, "description": "fixed", "completed": False}]


def test_flush_can_be_disabled(state: AppState) -> None:
    task = task_api.add_task(state, "typo")
    task.description = "fixed"
    state.flush_on_exit = False

    task_api.flush_working_copy(state)

    assert state.task_store.list_all() == [Task(id=task.id, description="typo")]


def test_load_working_copy_reads_file(state: AppState) -> None:
    state.task_store.add("from another caller")
    loaded = task_api.load_working_copy(state)
    assert [t.description for t in loaded] == ["from another caller"]
    assert state.tasks is loaded


def test_unsaved_task_toggles_without_touching_the_store(state: AppState, monkeypatch) -> None:
    draft = Task.transient("draft")
    state.tasks.append(draft)

    def fail(task_id, completed):
        raise TaskStoreIOError("should not be called")

    monkeypatch.setattr(state.task_store, "set_completion", fail)

    assert task_api.set_task_completion(state, draft.id, True) is draft
    assert draft.completed is True
    assert state.task_store.list_all() == []


def test_flush_assigns_ids_to_unsaved_tasks(state: AppState) -> None:
    saved = task_api.add_task(state, "saved")
    draft = Task.transient("draft", completed=True)
    state.tasks.append(draft)

    task_api.flush_working_copy(state)

    assert draft.is_saved
    assert draft.id > saved.id
    assert state.task_store.list_all() == [
        Task(id=saved.id, description="saved"),
        Task(id=draft.id, description="draft", completed=True),
    ]
