# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for output assembly and atomic writes."""

from pathlib import Path

import pytest

from embedgen import assembler
from embedgen.assembler import (
    GENERATED_HEADER,
    assemble_source,
    format_import_block,
    write_atomic,
)
from embedgen.data import Declaration, Fragment, TemplateBinding
from embedgen.templates import TemplateCatalog


@pytest.fixture
def fragment(tmp_path):
    """Build a Fragment with the given text."""
    (tmp_path / "Foo.tmpl").write_text("")
    template = TemplateCatalog().lookup(tmp_path, "Foo")
    declaration = Declaration(name="Bar", package="models", kind="struct",
                              embedded=("Foo",), source_file=tmp_path / "bar.go")

    def _fragment(text):
        return Fragment(TemplateBinding(declaration, template), text)

    return _fragment


class TestImportBlock:

    def test_no_imports(self):
        assert format_import_block([]) == []

    def test_single_import(self):
        assert format_import_block(["fmt"]) == ['import "fmt"']

    def test_several_imports(self):
        assert format_import_block(["fmt", "strings"]) == [
            "import (",
            '\t"fmt"',
            '\t"strings"',
            ")",
        ]


class TestAssembleSource:

    def test_without_imports(self, fragment):
        source = assemble_source("models", [], [fragment("// for Bar\n")])

        assert source == f"{GENERATED_HEADER}\n\npackage models\n\n// for Bar\n"
        assert "import" not in source

    def test_with_imports(self, fragment):
        source = assemble_source("models", ["fmt"], [fragment("var _ = fmt.Sprint\n")])

        assert source == (
            f"{GENERATED_HEADER}\n"
            "\n"
            "package models\n"
            "\n"
            'import "fmt"\n'
            "\n"
            "var _ = fmt.Sprint\n"
        )

    def test_fragments_in_order_separated_by_blank_line(self, fragment):
        source = assemble_source("models", [], [fragment("// one"), fragment("\n\n// two\n\n")])

        assert source.endswith("// one\n\n// two\n")

    def test_blank_fragments_are_skipped(self, fragment):
        source = assemble_source("models", [], [fragment("  \n"), fragment("// only")])

        assert source == f"{GENERATED_HEADER}\n\npackage models\n\n// only\n"


class TestWriteAtomic:

    @pytest.fixture
    def out_dir(self, tmp_path):
        directory = tmp_path / "out"
        directory.mkdir()
        return directory

    def test_writes_new_file(self, out_dir):
        target = out_dir / "out.go"

        assert write_atomic(target, "package p\n") == target
        assert target.read_text() == "package p\n"
        assert list(out_dir.iterdir()) == [target]

    def test_replaces_existing_file(self, out_dir):
        target = out_dir / "out.go"
        target.write_text("old")

        write_atomic(target, "new")

        assert target.read_text() == "new"

    def test_failed_replace_keeps_original(self, out_dir, monkeypatch):
        target = out_dir / "out.go"
        target.write_text("old")

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(assembler.os, "replace", fail_replace)

        with pytest.raises(OSError):
            write_atomic(target, "new")

        assert target.read_text() == "old"
        assert [p.name for p in out_dir.iterdir()] == ["out.go"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(OSError):
            write_atomic(Path(tmp_path / "missing" / "out.go"), "x")
