# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""embedgen configuration schema using Pydantic.

Configuration Priority
----------------------
Settings are loaded from multiple sources with the following priority (highest to lowest):
1. CLI arguments (passed to EmbedgenSettings constructor)
2. Environment variables (EMBEDGEN_* prefix)
3. Project config file (embedgen.yaml)
4. Built-in defaults (Field defaults in EmbedgenSettings)

The project config file is found by walking up from the current directory,
unless an explicit file is given.
"""

import os
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

PROJECT_CONFIG_FILE = "embedgen.yaml"

# Explicit project file for settings built in the current context; set by load_settings.
project_file_override: ContextVar[Path | None] = ContextVar("project_file_override", default=None)

LOG_LEVELS = ("quiet", "normal", "verbose", "debug")
FORMATTERS = ("gofmt", "check")


def find_project_config(start: Path | None = None) -> Path | None:
    """Find embedgen.yaml by walking up from start (default: CWD).

    EMBEDGEN_PROJECT_DIR, when set, is the only directory checked.
    """
    if project_dir_override := os.environ.get("EMBEDGEN_PROJECT_DIR"):
        candidate = Path(project_dir_override).resolve() / PROJECT_CONFIG_FILE
        return candidate if candidate.exists() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / PROJECT_CONFIG_FILE
        if candidate.exists():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a single YAML project file."""

    def __init__(self, settings_cls: type[BaseSettings], project_file: Path | None = None):
        super().__init__(settings_cls)
        if project_file is None:
            project_file = find_project_config()
        self.project_file_used = project_file if project_file and project_file.is_file() else None
        self._data = self._load() if self.project_file_used else {}

    def _load(self) -> dict[str, Any]:
        try:
            with open(self.project_file_used) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            if hasattr(e, "problem_mark"):
                mark = e.problem_mark
                location = f"line {mark.line + 1}, column {mark.column + 1}"
            else:
                location = "unknown location"
            raise yaml.YAMLError(
                f"Invalid YAML in config file: {self.project_file_used}\n"
                f"Error at {location}: {getattr(e, 'problem', None) or e}"
            ) from e
        if not isinstance(data, dict):
            raise yaml.YAMLError(
                f"Config file {self.project_file_used} must contain a mapping, "
                f"got {type(data).__name__}"
            )
        return data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        if field_name in self._data:
            return self._data[field_name], field_name, True
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class EmbedgenSettings(BaseSettings):
    """Settings for one embedgen invocation."""

    output_filename: str = Field(
        default="embedgen_gen.go",
        description="Name of the generated file written into each package directory",
    )
    template_suffix: str = Field(
        default=".tmpl", description="File suffix of template files"
    )
    formatter: str = Field(
        default="gofmt",
        description="Formatter for generated source: gofmt | check (syntax check only)",
    )
    gofmt_command: list[str] = Field(
        default_factory=lambda: ["gofmt"],
        description="Command line used when formatter is gofmt",
    )
    workers: int = Field(
        default=1, ge=1, description="Package directories processed in parallel"
    )
    log_level: str = Field(
        default="normal", description="Console verbosity level: quiet | normal | verbose | debug"
    )

    model_config = SettingsConfigDict(
        env_prefix="EMBEDGEN_",
        env_nested_delimiter="__",
        validate_assignment=True,
        extra="forbid",
        case_sensitive=False,
        env_file=None,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls, project_file=project_file_override.get()),
        )

    @field_validator("output_filename")
    @classmethod
    def validate_output_filename(cls, v: str) -> str:
        if not v.endswith(".go") or "/" in v or "\\" in v:
            raise ValueError("must be a bare file name ending in .go")
        if v.endswith("_test.go"):
            raise ValueError("must not be a _test.go file")
        return v

    @field_validator("template_suffix")
    @classmethod
    def validate_template_suffix(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("must start with '.' and name an extension")
        return v

    @field_validator("formatter")
    @classmethod
    def validate_formatter(cls, v: str) -> str:
        if v not in FORMATTERS:
            raise ValueError(f"must be one of {', '.join(FORMATTERS)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.lower()
        if v not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return v

    @field_validator("gofmt_command")
    @classmethod
    def validate_gofmt_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("must not be empty")
        return v
