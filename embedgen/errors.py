# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Error hierarchy for embedgen.

Every failure that aborts generation of a package directory derives from
EmbedgenError. A missing template is not an error: the catalog returns None.
"""

from pathlib import Path
from typing import Optional


class EmbedgenError(Exception):
    """Base exception for all embedgen errors."""
    pass


class SourceParseError(EmbedgenError):
    """A Go source file failed to parse."""

    def __init__(self, file: Path, line: int, column: int, message: str = "syntax error"):
        self.file = Path(file)
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"{self.file}:{line}:{column}: {message}")


class TemplateParseError(EmbedgenError):
    """A located template file failed to compile."""

    def __init__(self, path: Path, diagnostic: str, line: Optional[int] = None):
        self.path = Path(path)
        self.diagnostic = diagnostic
        self.line = line
        location = f"{self.path}:{line}" if line else str(self.path)
        super().__init__(f"{location}: template parse error: {diagnostic}")


class TemplateExecutionError(EmbedgenError):
    """Rendering a template for one declaration failed."""

    def __init__(self, declaration: str, template: str, diagnostic: str):
        self.declaration = declaration
        self.template = template
        self.diagnostic = diagnostic
        super().__init__(
            f"executing template {template!r} for type {declaration!r}: {diagnostic}"
        )


class OutputFormatError(EmbedgenError):
    """The assembled source was rejected by the formatter.

    The pre-format text is kept on the exception and included, with line
    numbers, in its string form.
    """

    def __init__(self, source: str, diagnostic: str):
        self.source = source
        self.diagnostic = diagnostic
        super().__init__(diagnostic)

    def __str__(self) -> str:
        numbered = "\n".join(
            f"{i:4d}  {line}" for i, line in enumerate(self.source.splitlines(), start=1)
        )
        return f"formatting generated source failed: {self.diagnostic}\n{numbered}"


class GenerationError(EmbedgenError):
    """Reading sources or writing the generated file failed."""
    pass


class ConfigurationError(EmbedgenError):
    """Invalid settings or command line arguments."""
    pass


class GenerationAborted(EmbedgenError):
    """Generation for a directory was skipped after an abort request."""
    pass
