"""Task data model.

A task file is a JSON array of task records:

    [
      {
        "id": 1,
        "description": "buy milk",
        "status": 0,
        "created_at": "2024-05-01T09:30:00.123456+02:00",
        "updated_at": "2024-05-01T09:30:00.123456+02:00"
      }
    ]

``status`` is stored as its integer value (0 todo, 1 in-progress, 2 done).
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Any

from task_cli.errors import InvalidStatusError

MAX_TASK_ID = 2**32 - 1

# Fractional seconds beyond microsecond precision, as written by other tools.
_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


class TaskStatus(IntEnum):
    """Task lifecycle status. Any status may move to any other."""

    TODO = 0
    IN_PROGRESS = 1
    DONE = 2

    @property
    def label(self) -> str:
        """Display name, also accepted by :func:`parse_status`."""
        return _STATUS_LABELS[self]

    def __str__(self) -> str:
        return self.label


_STATUS_LABELS = {
    TaskStatus.TODO: "todo",
    TaskStatus.IN_PROGRESS: "in-progress",
    TaskStatus.DONE: "done",
}
_STATUS_BY_LABEL = {label: status for status, label in _STATUS_LABELS.items()}

STATUS_LABELS = tuple(_STATUS_LABELS.values())


def parse_status(text: str) -> TaskStatus:
    """Parse a status name, ignoring case and surrounding whitespace.

    Args:
        text: One of "todo", "in-progress" or "done".

    Returns:
        The matching TaskStatus.

    Raises:
        InvalidStatusError: If the text names no known status.
    """
    status = _STATUS_BY_LABEL.get(text.strip().lower())
    if status is None:
        raise InvalidStatusError(
            f"Unknown task status '{text}' (expected one of: {', '.join(STATUS_LABELS)})"
        )
    return status


def now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, tolerating 'Z' and nanosecond fractions.

    Values without a UTC offset are taken as local time.
    """
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _EXTRA_FRACTION.sub(r"\1", text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


@dataclass
class Task:
    """A single task entry."""

    id: int
    description: str
    status: TaskStatus = TaskStatus.TODO
    created_at: datetime = field(default_factory=now)
    updated_at: datetime = field(default_factory=now)

    @classmethod
    def create(cls, task_id: int, description: str) -> "Task":
        """Build a new TODO task whose timestamps are both set to now."""
        timestamp = now()
        return cls(
            id=task_id,
            description=description,
            status=TaskStatus.TODO,
            created_at=timestamp,
            updated_at=timestamp,
        )

    def touch(self) -> None:
        """Move ``updated_at`` to now, strictly later than its previous value."""
        timestamp = now()
        if timestamp <= self.updated_at:
            timestamp = self.updated_at + timedelta(microseconds=1)
        self.updated_at = timestamp

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "status": int(self.status),
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a task from its JSON record.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a field has the wrong type or an invalid value.
        """
        if not isinstance(data, dict):
            raise ValueError(f"task record must be an object, got {type(data).__name__}")

        task_id = data["id"]
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise ValueError(f"task id must be an integer, got {task_id!r}")
        if not 0 <= task_id <= MAX_TASK_ID:
            raise ValueError(f"task id {task_id} is outside the unsigned 32-bit range")

        description = data["description"]
        if not isinstance(description, str):
            raise ValueError(f"description of task {task_id} must be a string")

        status = data["status"]
        if isinstance(status, bool) or not isinstance(status, int):
            raise ValueError(f"status of task {task_id} must be an integer, got {status!r}")

        return cls(
            id=task_id,
            description=description,
            status=TaskStatus(status),
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
        )
