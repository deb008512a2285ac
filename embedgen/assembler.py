# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Output assembly for one package.

File structure (with imports):
    <generated-code header>
                                <- blank line
    package <name>
                                <- blank line
    <import block>
                                <- blank line
    <fragment 1>
                                <- blank line
    <fragment 2>
    ...

The import block is omitted entirely when no template requested imports.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

from .data import Fragment
from .formatter import Formatter

logger = logging.getLogger(__name__)

GENERATED_HEADER = "// Code generated by embedgen. DO NOT EDIT."


def format_import_block(imports: Sequence[str]) -> list[str]:
    """Return Go import lines for the given paths.

    One path renders as a single `import "x"` line, several as a
    parenthesized block. No paths yields an empty list.
    """
    if not imports:
        return []
    if len(imports) == 1:
        return [f'import "{imports[0]}"']
    return ["import ("] + [f'\t"{path}"' for path in imports] + [")"]


def assemble_source(
    package: str,
    imports: Sequence[str],
    fragments: Sequence[Fragment],
    header: str = GENERATED_HEADER,
) -> str:
    """Assemble the unformatted text of a generated file.

    Args:
        package: Package clause name.
        imports: Finalized, sorted import paths.
        fragments: Fragments in scan order.
        header: Leading comment line.

    Returns:
        Go source ending in a newline.
    """
    parts: list[str] = [header, "", f"package {package}"]

    import_lines = format_import_block(imports)
    if import_lines:
        parts.append("")
        parts.extend(import_lines)

    for fragment in fragments:
        body = fragment.text.strip("\n")
        if not body.strip():
            continue
        parts.append("")
        parts.append(body)

    return "\n".join(parts) + "\n"


def format_source(source: str, formatter: Formatter) -> str:
    """Run the formatter; OutputFormatError propagates with the raw text."""
    formatted = formatter.format(source)
    logger.debug(f"Formatted generated source: {len(source)} -> {len(formatted)} chars")
    return formatted


def write_atomic(path: Path, text: str) -> Path:
    """Replace path with text in a single rename.

    The text goes to a temporary file in the same directory first, so a
    failed write leaves any existing file untouched.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path
