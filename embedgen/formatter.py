# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Formatters for generated Go source.

A formatter takes the assembled text and returns the canonical text, or
raises OutputFormatError when the text is not valid Go. `gofmt` is the
default; the syntax-check formatter validates with the tree-sitter grammar
and is meant for machines without a Go toolchain.
"""

import logging
import subprocess
from typing import Protocol, Sequence

from .errors import ConfigurationError, OutputFormatError
from .go_parser import grammar

logger = logging.getLogger(__name__)

FORMATTER_GOFMT = "gofmt"
FORMATTER_CHECK = "check"


class Formatter(Protocol):
    def format(self, source: str) -> str:
        ...


class GoFormatter:
    """Pipes source through gofmt (or a compatible command) on stdin."""

    def __init__(self, command: Sequence[str] = ("gofmt",)):
        if not command:
            raise ConfigurationError("formatter command must not be empty")
        self.command = list(command)

    def format(self, source: str) -> str:
        try:
            result = subprocess.run(
                self.command,
                input=source,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise OutputFormatError(source, f"formatter not found: {self.command[0]}") from e

        if result.returncode != 0:
            diagnostic = result.stderr.strip() or f"{self.command[0]} exited with {result.returncode}"
            raise OutputFormatError(source, diagnostic)
        return result.stdout


class SyntaxCheckFormatter:
    """Validates Go syntax with tree-sitter and returns the text unchanged."""

    def format(self, source: str) -> str:
        tree = grammar.create_parser().parse(bytes(source, "utf8"))
        if tree.root_node.has_error:
            line, column = grammar.error_position(tree.root_node)
            raise OutputFormatError(source, f"<generated>:{line}:{column}: syntax error")
        return source if source.endswith("\n") else source + "\n"


def create_formatter(name: str, gofmt_command: Sequence[str] = ("gofmt",)) -> Formatter:
    """Build the formatter selected in settings."""
    if name == FORMATTER_GOFMT:
        return GoFormatter(gofmt_command)
    if name == FORMATTER_CHECK:
        return SyntaxCheckFormatter()
    raise ConfigurationError(f"unknown formatter: {name!r}")
