# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
embedgen: template-driven code generation for Go packages

A struct or interface opts into a template by embedding a type with the
template's name:

    //go:generate embedgen generate
    type Bar struct {
        Stringer          // renders Stringer.tmpl from this directory
        ID   int    `json:"id"`
        Name string `json:"name"`
    }

Every binding in a package renders into one generated file
(embedgen_gen.go by default), with a merged, sorted import block.

Quick Start:
    >>> from embedgen import Generator
    >>> result = Generator().generate_directory(Path("internal/models"))
    >>> print(result.output_file)
"""

__version__ = "0.1.0"

from .data import Declaration, Fragment, GenerationResult, Member, TemplateBinding
from .errors import (
    ConfigurationError,
    EmbedgenError,
    GenerationAborted,
    GenerationError,
    OutputFormatError,
    SourceParseError,
    TemplateExecutionError,
    TemplateParseError,
)
from .generator import Generator, generate
from .settings import EmbedgenSettings, load_settings

__all__ = [
    "ConfigurationError",
    "Declaration",
    "EmbedgenError",
    "EmbedgenSettings",
    "Fragment",
    "GenerationAborted",
    "GenerationError",
    "GenerationResult",
    "Generator",
    "Member",
    "OutputFormatError",
    "SourceParseError",
    "TemplateBinding",
    "TemplateExecutionError",
    "TemplateParseError",
    "generate",
    "load_settings",
]
