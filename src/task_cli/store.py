"""File-backed task store.

The whole task list is held in memory and the whole file is rewritten
after every mutation. Writes go to a temporary sibling file that is then
renamed over the target, so a crash mid-write leaves the previous
contents in place.
"""

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from task_cli.errors import StoreFormatError, StoreIOError, TaskCliError
from task_cli.logging import Loggers
from task_cli.models import MAX_TASK_ID, Task

logger = Loggers.store()


def atomic_write_json(path: Path, data: Any, indent: int = 2) -> None:
    """Write JSON data to a file atomically.

    Serializes first so an unserializable value never touches the disk.

    Raises:
        TypeError, ValueError: If ``data`` is not JSON serializable.
        OSError: If the directory or file cannot be written.
    """
    content = json.dumps(data, indent=indent, ensure_ascii=False) + "\n"
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(path)


class TaskStore:
    """Persistent, ordered task collection backed by a JSON file.

    Example:
        >>> store = TaskStore.open("tasks.json")
        >>> store.next_id()
        1
        >>> [task.description for task in store]
        []
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._tasks: list[Task] = []

    @classmethod
    def open(cls, path: str | Path) -> "TaskStore":
        """Create a store for ``path`` and load its tasks."""
        store = cls(path)
        store.load()
        return store

    @property
    def path(self) -> Path:
        return self._path

    @property
    def tasks(self) -> list[Task]:
        """The live in-memory task list, in stored order."""
        return self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def is_empty(self) -> bool:
        """Check if the store has any tasks."""
        return not self._tasks

    def get(self, task_id: int) -> Task | None:
        """Get the first task with the given id."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def next_id(self) -> int:
        """Id for the next created task: one more than the largest id in use.

        Raises:
            TaskCliError: If the unsigned 32-bit id space is exhausted.
        """
        next_id = max((task.id for task in self._tasks), default=0) + 1
        if next_id > MAX_TASK_ID:
            raise TaskCliError(f"No task ids left in {self._path}")
        return next_id

    def load(self) -> list[Task]:
        """Load all tasks from the file, creating an empty file if missing.

        Returns:
            The loaded task list.

        Raises:
            StoreIOError: If the file cannot be created or read.
            StoreFormatError: If the file is not a JSON array of valid tasks.
        """
        if not self._path.exists():
            self._tasks = []
            self._write()
            logger.info("tasks_file_created", path=str(self._path))
            return self._tasks

        try:
            content = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreIOError(f"Failed to read {self._path}: {e}", self._path) from e

        self._tasks = self._parse(content)
        logger.info("tasks_loaded", path=str(self._path), count=len(self._tasks))
        return self._tasks

    def save(self, tasks: Iterable[Task] | None = None) -> None:
        """Persist the task list, replacing the file's contents.

        Args:
            tasks: New task list to hold and persist. If None, persists the
                current in-memory list.

        Raises:
            StoreIOError: If the file cannot be written.
            StoreFormatError: If a task cannot be serialized.
        """
        if tasks is not None:
            self._tasks = list(tasks)
        self._write()
        logger.debug("tasks_saved", path=str(self._path), count=len(self._tasks))

    def _write(self) -> None:
        try:
            atomic_write_json(self._path, [task.to_dict() for task in self._tasks])
        except (TypeError, ValueError) as e:
            raise StoreFormatError(
                f"Failed to serialize tasks for {self._path}: {e}", self._path
            ) from e
        except OSError as e:
            raise StoreIOError(f"Failed to write {self._path}: {e}", self._path) from e

    def _parse(self, content: str) -> list[Task]:
        # A zero-byte file counts as an empty list.
        if not content.strip():
            return []

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise StoreFormatError(f"Invalid JSON in {self._path}: {e}", self._path) from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise StoreFormatError(
                f"Expected a JSON array of tasks in {self._path}, got {type(data).__name__}",
                self._path,
            )

        tasks: list[Task] = []
        for index, record in enumerate(data):
            try:
                tasks.append(Task.from_dict(record))
            except KeyError as e:
                raise StoreFormatError(
                    f"Task #{index} in {self._path} is missing field {e}", self._path
                ) from e
            except (TypeError, ValueError) as e:
                raise StoreFormatError(
                    f"Task #{index} in {self._path} is invalid: {e}", self._path
                ) from e
        return tasks
