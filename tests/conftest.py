# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Shared pytest fixtures for the embedgen test suite.

Package directories are built under tmp_path. Tests use the tree-sitter
syntax-check formatter so no Go toolchain is required; tests that need
gofmt are skipped when it is not installed.
"""

import os
import shutil
from pathlib import Path
from typing import Callable, Dict

import pytest

from embedgen.formatter import SyntaxCheckFormatter
from embedgen.generator import Generator
from embedgen.settings import load_settings

requires_gofmt = pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep EMBEDGEN_* variables and stray embedgen.yaml files out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("EMBEDGEN_"):
            monkeypatch.delenv(key)
    config_home = tmp_path / "_config"
    config_home.mkdir()
    monkeypatch.setenv("EMBEDGEN_PROJECT_DIR", str(config_home))
    return config_home


@pytest.fixture
def make_package(tmp_path) -> Callable[..., Path]:
    """Factory writing a package directory from a {filename: content} mapping."""

    def _make(files: Dict[str, str], name: str = "models") -> Path:
        directory = tmp_path / name
        directory.mkdir(parents=True, exist_ok=True)
        for filename, content in files.items():
            (directory / filename).write_text(content, encoding="utf-8")
        return directory

    return _make


@pytest.fixture
def settings():
    return load_settings(formatter="check")


@pytest.fixture
def generator(settings) -> Generator:
    return Generator(settings, formatter=SyntaxCheckFormatter())


@pytest.fixture
def bar_source() -> str:
    """A package declaring Bar, which embeds Foo."""
    return (
        "package models\n"
        "\n"
        "type Foo struct{}\n"
        "\n"
        "type Bar struct {\n"
        "\tFoo\n"
        "\tID   int    `json:\"id\"`\n"
        "\tName string `json:\"name,omitempty\"`\n"
        "}\n"
    )
