"""Configuration for task-cli.

Settings Loading Priority (highest to lowest):
    1. Constructor arguments (e.g. the CLI's --file option)
    2. Environment variables (TASK_CLI_* prefix)
    3. Project config (./.task_cli/settings.json)
    4. User config (~/.task_cli/settings.json)
    5. .env file
    6. Default values

Example:
    >>> settings = get_settings()
    >>> settings.tasks_file
    PosixPath('tasks.json')
"""

from pathlib import Path
from typing import Literal, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

APP_NAME = "task_cli"

__all__ = [
    "APP_NAME",
    "TaskCliSettings",
    "get_settings",
    "set_settings",
    "reload_settings",
    "project_config_path",
    "user_config_path",
]


def project_config_path() -> Path:
    """Path to the project config file (./.task_cli/settings.json)."""
    return Path.cwd() / f".{APP_NAME}" / "settings.json"


def user_config_path() -> Path:
    """Path to the user config file (~/.task_cli/settings.json)."""
    return Path.home() / f".{APP_NAME}" / "settings.json"


def _get_json_config_source(
    settings_cls: Type[BaseSettings],
    json_file: Path,
) -> PydanticBaseSettingsSource | None:
    """Create a JSON config source if the file exists."""
    if not json_file.exists():
        return None
    return JsonConfigSettingsSource(settings_cls, json_file=json_file)


class TaskCliSettings(BaseSettings):
    """Settings for the task tracker."""

    model_config = SettingsConfigDict(
        env_prefix="TASK_CLI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    tasks_file: Path = Field(
        default=Path("tasks.json"),
        title="Tasks File",
        description="JSON file holding the task list",
    )
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for humans, json for machines)",
    )

    @field_validator("tasks_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ in the tasks file path."""
        return Path(v).expanduser()

    @field_validator("log_level", "log_format", mode="before")
    @classmethod
    def lowercase(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Layer JSON config files between the environment and .env.

        JSON sources are only included if the files exist.
        """
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]

        project_json = _get_json_config_source(settings_cls, project_config_path())
        if project_json:
            sources.append(project_json)

        user_json = _get_json_config_source(settings_cls, user_config_path())
        if user_json:
            sources.append(user_json)

        sources.append(dotenv_settings)
        return tuple(sources)


_settings_instance: TaskCliSettings | None = None


def get_settings() -> TaskCliSettings:
    """Get the global settings instance, creating it on first access."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = TaskCliSettings()
    return _settings_instance


def set_settings(settings: TaskCliSettings) -> None:
    """Set the global settings instance."""
    global _settings_instance
    _settings_instance = settings


def reload_settings() -> TaskCliSettings:
    """Drop the cached settings and load them again from all sources."""
    global _settings_instance
    _settings_instance = None
    return get_settings()
