"""Allow running task-cli with ``python -m task_cli``."""

from task_cli.cli import main

if __name__ == "__main__":
    main()
