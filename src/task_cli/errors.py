"""Exception hierarchy for task-cli.

Library code raises these instead of terminating the process; the CLI
layer decides how to report them and which exit code to use.
"""

from pathlib import Path


class TaskCliError(Exception):
    """Base class for all task-cli errors."""

    pass


class StoreError(TaskCliError):
    """Raised when the task file cannot be loaded or saved."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class StoreIOError(StoreError):
    """Raised when the task file cannot be created, read or written."""

    pass


class StoreFormatError(StoreError):
    """Raised when the task file holds invalid JSON or invalid task records."""

    pass


class InvalidStatusError(TaskCliError, ValueError):
    """Raised when a status string is not one of the known statuses."""

    pass

