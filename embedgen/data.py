# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Data structures shared across the generation pipeline.

Declarations and members are produced by the scanner and are immutable
afterwards. Bindings, fragments and results are created per run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .templates.catalog import Template
    from .errors import EmbedgenError

# key:"value" pairs in a Go struct tag; values may contain escaped quotes.
_TAG_PAIR_RE = re.compile(r'([^\s:"]+):"((?:[^"\\]|\\.)*)"')


@dataclass(frozen=True)
class Member:
    """A named struct field or interface method."""
    name: str
    type_name: str
    tag: str | None = None
    line: int = 0

    def tag_lookup(self, key: str) -> str | None:
        """Return the value associated with key in the tag, or None.

        Follows the reflect.StructTag convention: space separated
        key:"value" pairs, first match wins.
        """
        if not self.tag:
            return None
        for match in _TAG_PAIR_RE.finditer(self.tag):
            if match.group(1) == key:
                return match.group(2).replace('\\"', '"').replace("\\\\", "\\")
        return None


@dataclass(frozen=True)
class Declaration:
    """A top-level struct or interface type declaration."""
    name: str
    package: str
    kind: str
    members: tuple[Member, ...] = ()
    embedded: tuple[str, ...] = ()
    source_file: Path = field(default_factory=Path)
    line: int = 0

    @property
    def directory(self) -> Path:
        return self.source_file.parent

    @property
    def is_struct(self) -> bool:
        return self.kind == "struct"

    @property
    def is_interface(self) -> bool:
        return self.kind == "interface"


@dataclass
class ScanResult:
    """Everything the scanner found in one package directory."""
    directory: Path
    package: str | None
    declarations: list[Declaration] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)


@dataclass(frozen=True)
class TemplateBinding:
    """A declaration paired with a template it opted into."""
    declaration: Declaration
    template: Template

    @property
    def name(self) -> str:
        return self.template.name


@dataclass(frozen=True)
class Fragment:
    """Rendered output of one binding."""
    binding: TemplateBinding
    text: str


@dataclass
class GenerationResult:
    """Outcome of generating one package directory."""
    directory: Path
    output_file: Path | None = None
    bindings: int = 0
    imports: list[str] = field(default_factory=list)
    source: str | None = None
    error: EmbedgenError | None = None

    @property
    def success(self) -> bool:
        return self.error is None
