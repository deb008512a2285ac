# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Command-line interface for embedgen.

Usage:
    embedgen generate [DIRECTORY...]
    python -m embedgen generate ./internal/models
"""

from .cli import cli, main

__all__ = ["cli", "main"]
