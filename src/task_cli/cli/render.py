"""Rich rendering of tasks for the terminal."""

from collections.abc import Sequence
from datetime import datetime

from rich.console import Console
from rich.table import Table
from rich.text import Text

from task_cli.models import Task, TaskStatus

STATUS_STYLES = {
    TaskStatus.TODO: "yellow",
    TaskStatus.IN_PROGRESS: "cyan",
    TaskStatus.DONE: "green",
}

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _format_time(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def task_table(tasks: Sequence[Task]) -> Table:
    """Build a table with one row per task, in the given order."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2, 0, 0))
    table.add_column("ID", style="bold cyan", justify="right", no_wrap=True)
    table.add_column("Description")
    table.add_column("Status", no_wrap=True)
    table.add_column("Created", style="dim", no_wrap=True)
    table.add_column("Updated", style="dim", no_wrap=True)

    for task in tasks:
        style = STATUS_STYLES.get(task.status, "")
        table.add_row(
            str(task.id),
            Text(task.description),
            f"[{style}]{task.status.label}[/{style}]" if style else task.status.label,
            _format_time(task.created_at),
            _format_time(task.updated_at),
        )
    return table


def print_tasks(console: Console, tasks: Sequence[Task]) -> None:
    if not tasks:
        console.print("No tasks found.")
        return
    console.print(task_table(tasks))
