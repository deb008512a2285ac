# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""embedgen configuration module.

Provides type-safe configuration management with Pydantic Settings.
"""

from .loader import get_default_settings, load_settings
from .schema import PROJECT_CONFIG_FILE, EmbedgenSettings, find_project_config

__all__ = [
    "EmbedgenSettings",
    "PROJECT_CONFIG_FILE",
    "find_project_config",
    "get_default_settings",
    "load_settings",
]
