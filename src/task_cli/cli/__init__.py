"""Command-line interface for task-cli."""

from task_cli.cli.app import app, main

__all__ = ["app", "main"]
