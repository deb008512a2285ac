# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Configuration loading for embedgen."""

import os
from pathlib import Path
from typing import Any, Optional
from unittest.mock import patch

import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schema import EmbedgenSettings, project_file_override


def load_settings(config_file: Optional[Path] = None, **cli_overrides: Any) -> EmbedgenSettings:
    """Load settings with hierarchical priority.

    Priority order (highest to lowest):
    1. CLI arguments (passed as kwargs; None values are ignored)
    2. Environment variables (EMBEDGEN_* prefix)
    3. Project config file (embedgen.yaml, or config_file)
    4. Built-in defaults

    Raises:
        ConfigurationError: If the config file is missing or malformed, or
            any setting fails validation.
    """
    overrides = {k: v for k, v in cli_overrides.items() if v is not None}

    if config_file is not None and not Path(config_file).exists():
        raise ConfigurationError(f"Config file not found: {config_file}")

    token = project_file_override.set(Path(config_file) if config_file else None)
    try:
        return EmbedgenSettings(**overrides)
    except ValidationError as e:
        details = []
        for error in e.errors():
            field = " → ".join(str(x) for x in error["loc"])
            details.append(f"{field}: {error['msg']}")
        raise ConfigurationError("Invalid configuration:\n  " + "\n  ".join(details)) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(str(e)) from e
    finally:
        project_file_override.reset(token)


def get_default_settings() -> EmbedgenSettings:
    """Settings with only default values (no files or env vars)."""
    filtered_env = {
        k: v for k, v in os.environ.items()
        if not k.upper().startswith('EMBEDGEN_')
    }
    with patch.dict(os.environ, filtered_env, clear=True):
        return load_settings(config_file=Path(os.devnull))
