"""Tests for the task-cli command line."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from task_cli import __version__
from task_cli.cli import app
from task_cli.config import get_settings
from task_cli.models import TaskStatus
from task_cli.store import TaskStore


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def invoke(runner: CliRunner, tasks_file: Path):
    """Invoke the CLI against the test task file."""

    def _invoke(*args: str):
        return runner.invoke(app, ["--file", str(tasks_file), *args])

    return _invoke


def _stored(tasks_file: Path) -> list[dict]:
    return json.loads(tasks_file.read_text())


class TestAdd:
    """Tests for the add command."""

    def test_add_single(self, invoke, tasks_file: Path):
        result = invoke("add", "buy milk")
        assert result.exit_code == 0, result.output
        assert "Task added successfully (ID: 1)" in result.output
        assert [t["description"] for t in _stored(tasks_file)] == ["buy milk"]

    def test_add_many(self, invoke, tasks_file: Path):
        result = invoke("add", "one", "two", "three")
        assert result.exit_code == 0, result.output
        assert "(ID: 3)" in result.output
        assert [t["description"] for t in _stored(tasks_file)] == ["one", "two", "three"]

    def test_add_requires_description(self, invoke):
        result = invoke("add")
        assert result.exit_code == 2

    def test_add_empty_and_padded_descriptions(self, invoke, tasks_file: Path):
        result = invoke("add", "", "  padded ")
        assert result.exit_code == 0, result.output
        assert [t["description"] for t in _stored(tasks_file)] == ["", "  padded "]


class TestList:
    """Tests for the list command."""

    def test_add_then_list(self, invoke):
        invoke("add", "buy milk")
        result = invoke("list")
        assert result.exit_code == 0, result.output
        assert "buy milk" in result.output
        assert "todo" in result.output

    def test_list_empty(self, invoke, tasks_file: Path):
        result = invoke("list")
        assert result.exit_code == 0
        assert "No tasks found." in result.output
        assert _stored(tasks_file) == []

    def test_list_by_status(self, invoke):
        invoke("add", "alpha", "beta", "gamma")
        invoke("mark-done", "2")
        result = invoke("list", "DONE")
        assert result.exit_code == 0, result.output
        assert "beta" in result.output
        assert "alpha" not in result.output
        assert "gamma" not in result.output

    def test_list_by_status_no_matches(self, invoke):
        invoke("add", "alpha")
        result = invoke("list", "in-progress")
        assert result.exit_code == 0
        assert "No tasks found." in result.output

    def test_list_unknown_status(self, invoke):
        result = invoke("list", "bogus")
        assert result.exit_code == 2
        assert "Unknown task status" in result.output

    def test_list_too_many_arguments(self, invoke):
        result = invoke("list", "todo", "done")
        assert result.exit_code == 2

    def test_description_markup_is_not_interpreted(self, invoke):
        invoke("add", "fix [bold]parser[/bold]")
        result = invoke("list")
        assert "fix [bold]parser[/bold]" in result.output


class TestUpdateDelete:
    """Tests for the update and delete commands."""

    def test_update(self, invoke, tasks_file: Path):
        invoke("add", "old")
        result = invoke("update", "1", "new")
        assert result.exit_code == 0, result.output
        assert "Task 1 updated" in result.output
        assert _stored(tasks_file)[0]["description"] == "new"

    def test_update_unknown_id(self, invoke, tasks_file: Path):
        invoke("add", "old")
        result = invoke("update", "9", "new")
        assert result.exit_code == 0
        assert "no task with ID 9" in result.output
        assert _stored(tasks_file)[0]["description"] == "old"

    def test_update_wrong_argument_count(self, invoke):
        assert invoke("update", "1").exit_code == 2
        assert invoke("update", "1", "a", "b").exit_code == 2

    @pytest.mark.parametrize("bad_id", ["abc", "1.5", "4294967296"])
    def test_update_invalid_id(self, invoke, bad_id):
        result = invoke("update", bad_id, "new")
        assert result.exit_code == 2

    def test_delete(self, invoke, tasks_file: Path):
        invoke("add", "a", "b")
        result = invoke("delete", "1")
        assert result.exit_code == 0, result.output
        assert "Task 1 deleted" in result.output
        assert [t["id"] for t in _stored(tasks_file)] == [2]

    def test_delete_unknown_id(self, invoke):
        result = invoke("delete", "3")
        assert result.exit_code == 0
        assert "no task with ID 3" in result.output

    def test_delete_invalid_id(self, invoke):
        assert invoke("delete", "x").exit_code == 2


class TestMark:
    """Tests for the mark commands."""

    def test_mark(self, invoke, tasks_file: Path):
        invoke("add", "a")
        result = invoke("mark", "1", "In-Progress")
        assert result.exit_code == 0, result.output
        assert "Task 1 marked in-progress" in result.output
        assert _stored(tasks_file)[0]["status"] == int(TaskStatus.IN_PROGRESS)

    def test_mark_in_progress_and_done(self, invoke, tasks_file: Path):
        invoke("add", "a")
        assert invoke("mark-in-progress", "1").exit_code == 0
        assert _stored(tasks_file)[0]["status"] == 1
        assert invoke("mark-done", "1").exit_code == 0
        assert _stored(tasks_file)[0]["status"] == 2

    def test_mark_unknown_status(self, invoke):
        invoke("add", "a")
        result = invoke("mark", "1", "finished")
        assert result.exit_code == 2

    def test_mark_unknown_id(self, invoke):
        result = invoke("mark-done", "5")
        assert result.exit_code == 0
        assert "no task with ID 5" in result.output
        assert result.output.count("no task with ID 5") == 1
        assert "task_not_found" not in result.output

    def test_mark_file_without_timestamp_offsets(self, invoke, tasks_file: Path):
        tasks_file.write_text(
            json.dumps(
                [
                    {
                        "id": 1,
                        "description": "legacy",
                        "status": 0,
                        "created_at": "2024-05-01T09:30:00",
                        "updated_at": "2024-05-01T09:30:00",
                    }
                ]
            )
        )
        result = invoke("mark-done", "1")
        assert result.exit_code == 0, result.output
        assert _stored(tasks_file)[0]["status"] == 2


class TestStoreErrors:
    """Store failures are reported and exit with code 1."""

    def test_corrupt_file(self, invoke, tasks_file: Path):
        tasks_file.write_text("{broken")
        result = invoke("list")
        assert result.exit_code == 1
        assert "Error" in result.output
        assert "Invalid JSON" in result.output

    def test_unreadable_file(self, invoke, tasks_file: Path):
        tasks_file.mkdir()
        result = invoke("add", "a")
        assert result.exit_code == 1
        assert "Failed to read" in result.output


class TestOptions:
    """Tests for global options and settings."""

    def test_version(self, runner: CliRunner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_default_file_in_working_directory(self, runner: CliRunner, project_dir: Path):
        result = runner.invoke(app, ["add", "here"])
        assert result.exit_code == 0, result.output
        assert (project_dir / "tasks.json").exists()

    def test_env_selects_file(self, runner: CliRunner, project_dir: Path):
        target = project_dir / "env-tasks.json"
        result = runner.invoke(app, ["add", "x"], env={"TASK_CLI_TASKS_FILE": str(target)})
        assert result.exit_code == 0, result.output
        assert [t.description for t in TaskStore.open(target)] == ["x"]

    def test_file_option_sets_global_settings(self, invoke, tasks_file: Path):
        invoke("list")
        assert get_settings().tasks_file == tasks_file

    def test_invalid_settings(self, runner: CliRunner):
        result = runner.invoke(app, ["list"], env={"TASK_CLI_LOG_LEVEL": "loud"})
        assert result.exit_code == 1
        assert "invalid settings" in result.output
