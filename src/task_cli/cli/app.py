"""Command-line interface for task-cli.

Each invocation opens the task file once, runs a single command and
exits. Usage errors (bad arguments, unknown status, invalid id) exit
with code 2; store failures print an error and exit with code 1.

Example:
    $ task-cli add "buy milk" "walk the dog"
    $ task-cli mark-done 1
    $ task-cli list done
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from task_cli import __version__
from task_cli.config import TaskCliSettings, set_settings
from task_cli.errors import InvalidStatusError, TaskCliError
from task_cli.logging import Loggers, bind_context, configure_logging
from task_cli.models import MAX_TASK_ID, STATUS_LABELS, TaskStatus, parse_status
from task_cli.operations import (
    add_task,
    delete_task,
    list_tasks,
    list_tasks_by_status,
    mark_task,
    update_task,
)
from task_cli.store import TaskStore
from task_cli.cli.render import print_tasks

logger = Loggers.cli()

app = typer.Typer(
    name="task-cli",
    help="Track tasks in a local JSON file.",
    no_args_is_help=True,
    add_completion=False,
    pretty_exceptions_enable=False,
)


def _console() -> Console:
    return Console()


def _error_console() -> Console:
    return Console(stderr=True)


def _status_callback(value: str | None) -> TaskStatus | None:
    if value is None:
        return None
    try:
        return parse_status(value)
    except InvalidStatusError as e:
        raise typer.BadParameter(str(e)) from e


def _version_callback(value: bool) -> None:
    if value:
        _console().print(f"task-cli {__version__}")
        raise typer.Exit()


TaskIdArg = Annotated[
    int,
    typer.Argument(min=0, max=MAX_TASK_ID, help="Task id", show_default=False),
]
StatusArg = Annotated[
    str,
    typer.Argument(
        callback=_status_callback,
        metavar="STATUS",
        help=f"One of: {', '.join(STATUS_LABELS)}",
        show_default=False,
    ),
]


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Report library errors on stderr and exit with code 1."""
    try:
        yield
    except TaskCliError as e:
        logger.debug("command_failed", error=str(e), error_type=type(e).__name__)
        _error_console().print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


def _open_store(ctx: typer.Context) -> TaskStore:
    settings: TaskCliSettings = ctx.obj
    return TaskStore.open(settings.tasks_file)


def _report_missing(task_id: int) -> None:
    _error_console().print(f"[yellow]Warning:[/yellow] no task with ID {task_id}")


@app.callback()
def main_callback(
    ctx: typer.Context,
    file: Annotated[
        Optional[Path],
        typer.Option(
            "--file",
            "-f",
            help="Task file to use (default: tasks.json, or TASK_CLI_TASKS_FILE)",
            show_default=False,
        ),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = False,
) -> None:
    """Track tasks in a local JSON file."""
    overrides = {"tasks_file": file} if file is not None else {}
    try:
        settings = TaskCliSettings(**overrides)
    except ValidationError as e:
        _error_console().print(f"[bold red]Error:[/bold red] invalid settings\n{escape(str(e))}")
        raise typer.Exit(code=1) from e

    set_settings(settings)
    configure_logging(settings)
    bind_context(tasks_file=str(settings.tasks_file))
    ctx.obj = settings


@app.command()
def add(
    ctx: typer.Context,
    descriptions: Annotated[
        list[str],
        typer.Argument(help="One task is added per description", show_default=False),
    ],
) -> None:
    """Add one task per DESCRIPTION."""
    console = _console()
    with _handle_errors():
        store = _open_store(ctx)
        for description in descriptions:
            task = add_task(store, description)
            console.print(f"Task added successfully (ID: {task.id})")


@app.command()
def update(ctx: typer.Context, task_id: TaskIdArg, description: str) -> None:
    """Replace the description of task TASK_ID."""
    with _handle_errors():
        store = _open_store(ctx)
        if update_task(store, task_id, description):
            _console().print(f"Task {task_id} updated")
        else:
            _report_missing(task_id)


@app.command()
def delete(ctx: typer.Context, task_id: TaskIdArg) -> None:
    """Delete task TASK_ID."""
    with _handle_errors():
        store = _open_store(ctx)
        if delete_task(store, task_id):
            _console().print(f"Task {task_id} deleted")
        else:
            _report_missing(task_id)


def _mark(ctx: typer.Context, task_id: int, status: TaskStatus) -> None:
    with _handle_errors():
        store = _open_store(ctx)
        if mark_task(store, task_id, status):
            _console().print(f"Task {task_id} marked {status.label}")
        else:
            _report_missing(task_id)


@app.command()
def mark(ctx: typer.Context, task_id: TaskIdArg, status: StatusArg) -> None:
    """Set the status of task TASK_ID."""
    _mark(ctx, task_id, status)


@app.command("mark-in-progress")
def mark_in_progress(ctx: typer.Context, task_id: TaskIdArg) -> None:
    """Mark task TASK_ID as in-progress."""
    _mark(ctx, task_id, TaskStatus.IN_PROGRESS)


@app.command("mark-done")
def mark_done(ctx: typer.Context, task_id: TaskIdArg) -> None:
    """Mark task TASK_ID as done."""
    _mark(ctx, task_id, TaskStatus.DONE)


@app.command("list")
def list_command(
    ctx: typer.Context,
    status: Annotated[
        Optional[str],
        typer.Argument(
            callback=_status_callback,
            metavar="[STATUS]",
            help=f"Only list tasks with this status ({', '.join(STATUS_LABELS)})",
            show_default=False,
        ),
    ] = None,
) -> None:
    """List all tasks, or only those with STATUS."""
    with _handle_errors():
        store = _open_store(ctx)
        tasks = list_tasks(store) if status is None else list_tasks_by_status(store, status)
        print_tasks(_console(), tasks)


def main() -> None:
    """Console script entry point."""
    app()
