"""task-cli - a single-user task tracker backed by a local JSON file.

This package provides:

- Task model with a three-valued status (todo, in-progress, done)
- TaskStore: in-memory task list persisted as a JSON array
- Operations to add, update, delete, mark and list tasks
- A typer-based command line (``task-cli``)

Example:
    >>> from task_cli import TaskStore, add_task, list_tasks
    >>> store = TaskStore.open("tasks.json")
    >>> task = add_task(store, "buy milk")
    >>> [t.description for t in list_tasks(store)]
"""

__version__ = "0.1.0"

from task_cli.errors import (
    InvalidStatusError,
    StoreError,
    StoreFormatError,
    StoreIOError,
    TaskCliError,
)
from task_cli.models import Task, TaskStatus, parse_status
from task_cli.operations import (
    add_task,
    delete_task,
    list_tasks,
    list_tasks_by_status,
    mark_task,
    update_task,
)
from task_cli.store import TaskStore

__all__ = [
    # Models
    "Task",
    "TaskStatus",
    "parse_status",
    # Store
    "TaskStore",
    # Operations
    "add_task",
    "update_task",
    "delete_task",
    "mark_task",
    "list_tasks",
    "list_tasks_by_status",
    # Errors
    "TaskCliError",
    "StoreError",
    "StoreIOError",
    "StoreFormatError",
    "InvalidStatusError",
]
