"""Shared test fixtures for task-cli tests.

Provides:
- An isolated environment (no TASK_CLI_* variables, temporary home and
  working directory, fresh global settings) for every test
- Task file and store fixtures
"""

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

import pytest
import structlog

from task_cli import config
from task_cli.logging import ensure_default_logging
from task_cli.models import Task, TaskStatus
from task_cli.store import TaskStore


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each test from an empty project directory with an empty home."""
    for name in list(os.environ):
        if name.startswith("TASK_CLI_"):
            monkeypatch.delenv(name)

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))

    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)

    monkeypatch.setattr(config, "_settings_instance", None)
    return project


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    ensure_default_logging()


@pytest.fixture
def project_dir(isolated_environment: Path) -> Path:
    """The temporary working directory of the current test."""
    return isolated_environment


@pytest.fixture
def tasks_file(project_dir: Path) -> Path:
    """Path of a task file that does not exist yet."""
    return project_dir / "tasks.json"


@pytest.fixture
def store(tasks_file: Path) -> TaskStore:
    """An opened, empty task store."""
    return TaskStore.open(tasks_file)


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for tasks with fixed, distinct timestamps."""
    base = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)

    def _make(
        task_id: int,
        description: str = "task",
        status: TaskStatus = TaskStatus.TODO,
    ) -> Task:
        created = base + timedelta(minutes=task_id)
        return Task(
            id=task_id,
            description=description,
            status=status,
            created_at=created,
            updated_at=created,
        )

    return _make
