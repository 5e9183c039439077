"""Task operations over an explicit TaskStore.

Every mutating operation persists the whole store before returning.

Example:
    >>> store = TaskStore.open("tasks.json")
    >>> task = add_task(store, "buy milk")
    >>> mark_task(store, task.id, TaskStatus.DONE)
    True
    >>> [t.description for t in list_tasks_by_status(store, TaskStatus.DONE)]
    ['buy milk']
"""

from task_cli.logging import Loggers
from task_cli.models import Task, TaskStatus, parse_status
from task_cli.store import TaskStore

__all__ = [
    "add_task",
    "update_task",
    "delete_task",
    "mark_task",
    "list_tasks",
    "list_tasks_by_status",
    "parse_status",
]

logger = Loggers.operations()


def add_task(store: TaskStore, description: str) -> Task:
    """Create a TODO task, append it to the store and persist.

    Args:
        store: Store to add to.
        description: Task description, stored as given.

    Returns:
        The created task.
    """
    task = Task.create(store.next_id(), description)
    store.tasks.append(task)
    store.save()
    logger.info("task_added", task_id=task.id)
    return task


def update_task(store: TaskStore, task_id: int, description: str) -> bool:
    """Replace the description of the first task with ``task_id``.

    The store is persisted even when no task matches.

    Returns:
        True if a task was updated, False if none has that id.
    """
    task = store.get(task_id)
    if task is not None:
        task.description = description
        task.touch()
        logger.info("task_updated", task_id=task_id)
    else:
        logger.info("task_not_found", task_id=task_id, operation="update")
    store.save()
    return task is not None


def delete_task(store: TaskStore, task_id: int) -> int:
    """Remove every task with ``task_id`` and persist.

    Returns:
        Number of removed tasks.
    """
    remaining = [task for task in store if task.id != task_id]
    removed = len(store) - len(remaining)
    store.save(remaining)
    if removed:
        logger.info("task_deleted", task_id=task_id, removed=removed)
    else:
        logger.info("task_not_found", task_id=task_id, operation="delete")
    return removed


def mark_task(store: TaskStore, task_id: int, status: TaskStatus) -> bool:
    """Set the status of the first task with ``task_id``.

    Any status may be set regardless of the current one. The store is
    persisted even when no task matches.

    Returns:
        True if a task was marked, False if none has that id.
    """
    task = store.get(task_id)
    if task is not None:
        task.status = status
        task.touch()
        logger.info("task_marked", task_id=task_id, status=status.label)
    else:
        logger.info("task_not_found", task_id=task_id, operation="mark")
    store.save()
    return task is not None


def list_tasks(store: TaskStore) -> list[Task]:
    """All tasks in stored order."""
    return list(store)


def list_tasks_by_status(store: TaskStore, status: TaskStatus) -> list[Task]:
    """Tasks with the given status, in stored order."""
    return [task for task in store if task.status == status]
