# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for the import manager."""

import pytest

from embedgen.imports import ImportManager


class TestImportManager:

    def test_deduplicates_and_sorts(self):
        imports = ImportManager()
        imports.extend(["strings", "fmt", "net/http", "fmt", "strings"])

        assert imports.finalize() == ["fmt", "net/http", "strings"]
        assert len(imports) == 3
        assert "fmt" in imports

    def test_order_of_registration_does_not_matter(self):
        first, second = ImportManager(), ImportManager()
        first.extend(["b", "a", "c"])
        second.extend(["c", "b", "a"])

        assert first.finalize() == second.finalize()

    def test_whitespace_is_stripped(self):
        imports = ImportManager()
        imports.register(" fmt ")

        assert imports.finalize() == ["fmt"]

    def test_empty_manager(self):
        assert ImportManager().finalize() == []

    @pytest.mark.parametrize("path", ["", "   ", None, 42])
    def test_invalid_path(self, path):
        with pytest.raises(ValueError):
            ImportManager().register(path)
