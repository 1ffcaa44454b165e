# tests/test_bootstrap.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from todolist.cli import main as cli_main
from todolist.cli.bootstrap import create_initial_state
from todolist.config import Settings
from todolist.tasks.task_store import TaskStoreStartupError


def test_create_initial_state_creates_file_and_loads_tasks(settings) -> None:
    state = create_initial_state(settings=settings)
    assert Path(settings.tasks_path).exists()
    assert state.tasks == []

    state.task_store.add("persisted")
    again = create_initial_state(settings=settings)
    assert [t.description for t in again.tasks] == ["persisted"]
    assert again.task_store.add("next") == 2


def test_create_initial_state_fails_on_corrupt_file(settings) -> None:
    Path(settings.tasks_path).parent.mkdir(parents=True)
    Path(settings.tasks_path).write_text("[{", "utf-8")

    with pytest.raises(TaskStoreStartupError):
        create_initial_state(settings=settings)


def test_shutdown_flushes_working_copy(settings) -> None:
    state = create_initial_state(settings=settings)
    state.task_store.add("a")
    state.tasks = state.task_store.list_all()
    state.tasks[0].description = "edited in the UI"

    cli_main._shutdown(state)

    data = json.loads(Path(settings.tasks_path).read_text("utf-8"))
    assert data[0]["description"] == "edited in the UI"


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path / "d"))
    monkeypatch.delenv("TODO_TASKS_PATH", raising=False)
    monkeypatch.setenv("TODO_JSON_INDENT", "4")
    monkeypatch.setenv("TODO_FLUSH_ON_EXIT", "off")

    s = Settings.from_env()

    assert s.data_dir == tmp_path / "d"
    assert s.tasks_path == tmp_path / "d" / "tasks.json"
    assert s.json_indent == 4
    assert s.flush_on_exit is False


def test_settings_ignore_bad_ints(monkeypatch) -> None:
    monkeypatch.setenv("TODO_JSON_INDENT", "wide")
    assert Settings.from_env().json_indent == 2
