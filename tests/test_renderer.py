# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for template contexts and rendering."""

from pathlib import Path

import pytest

from embedgen.data import Declaration, Member, TemplateBinding
from embedgen.errors import TemplateExecutionError
from embedgen.imports import ImportManager
from embedgen.templates import TemplateCatalog, TemplateContext, render_binding


@pytest.fixture
def bar():
    return Declaration(
        name="Bar",
        package="models",
        kind="struct",
        members=(
            Member("ID", "int", 'json:"id"', line=7),
            Member("Name", "string", 'json:"name,omitempty"', line=8),
            Member("secret", "string", line=9),
        ),
        embedded=("Foo",),
        source_file=Path("models/bar.go"),
        line=5,
    )


@pytest.fixture
def bind(tmp_path, bar):
    """Write a template and bind it to Bar."""

    def _bind(body, name="Foo"):
        (tmp_path / f"{name}.tmpl").write_text(body)
        template = TemplateCatalog().lookup(tmp_path, name)
        return TemplateBinding(declaration=bar, template=template)

    return _bind


class TestTemplateContext:

    def test_exposes_declaration(self, bar):
        context = TemplateContext(declaration=bar, template_name="Foo")

        assert context.name == "Bar"
        assert context.package == "models"
        assert context.kind == "struct"
        assert context.members == bar.members
        assert context.embedded == ("Foo",)
        assert context.receiver == "b"

    def test_add_import_records_and_renders_nothing(self, bar):
        context = TemplateContext(declaration=bar, template_name="Foo")

        assert context.add_import("fmt") == ""
        assert context.add_import("fmt") == ""
        assert context.imports == ("fmt", "fmt")

    def test_contexts_do_not_share_imports(self, bar):
        first = TemplateContext(declaration=bar, template_name="Foo")
        second = TemplateContext(declaration=bar, template_name="Foo")

        first.add_import("fmt")

        assert second.imports == ()


class TestRenderBinding:

    def test_renders_name(self, bind):
        fragment = render_binding(bind("// for {{ name }}\n"), ImportManager())

        assert fragment.text == "// for Bar\n"
        assert fragment.binding.name == "Foo"

    def test_members_and_tags(self, bind):
        binding = bind(
            "{% for m in members if m.tag_lookup('json') %}"
            "{{ m.name }}={{ m.tag_lookup('json') | quote }};"
            "{% endfor %}"
        )

        text = render_binding(binding, ImportManager()).text

        assert text == 'ID="id";Name="name,omitempty";'

    def test_method_generation(self, bind):
        binding = bind(
            "func ({{ receiver }} *{{ name }}) TableName() string {\n"
            "\treturn {{ name | snakecase | quote }}\n"
            "}\n"
        )

        text = render_binding(binding, ImportManager()).text

        assert text == 'func (b *Bar) TableName() string {\n\treturn "bar"\n}\n'

    def test_imports_merge_into_manager(self, bind):
        imports = ImportManager()
        imports.register("fmt")

        fragment = render_binding(
            bind('{{ add_import("strings") }}{{ ctx.add_import("fmt") }}x'), imports
        )

        assert fragment.text == "x"
        assert imports.finalize() == ["fmt", "strings"]

    def test_undefined_variable_is_execution_error(self, bind):
        with pytest.raises(TemplateExecutionError) as exc_info:
            render_binding(bind("{{ nonexistent }}"), ImportManager())

        err = exc_info.value
        assert err.declaration == "Bar"
        assert err.template == "Foo"
        assert "nonexistent" in err.diagnostic

    def test_python_error_in_expression(self, bind):
        with pytest.raises(TemplateExecutionError) as exc_info:
            render_binding(bind("{{ members[10].name }}"), ImportManager())

        assert "Bar" in str(exc_info.value)

    def test_failed_render_adds_no_imports(self, bind):
        imports = ImportManager()

        with pytest.raises(TemplateExecutionError):
            render_binding(bind('{{ add_import("net/http") }}{{ missing.attr }}'), imports)

        assert len(imports) == 0

    def test_empty_import_path_is_execution_error(self, bind):
        imports = ImportManager()

        with pytest.raises(TemplateExecutionError):
            render_binding(bind('{{ add_import("  ") }}'), imports)

        assert len(imports) == 0

    def test_arithmetic_overflow_is_execution_error(self, bind):
        with pytest.raises(TemplateExecutionError) as exc_info:
            render_binding(bind("// {{ 2.0 ** 100000 }}"), ImportManager())

        assert exc_info.value.declaration == "Bar"
        assert "OverflowError" in exc_info.value.diagnostic

    def test_runaway_recursion_is_execution_error(self, bind):
        binding = bind("{% macro f() %}{{ f() }}{% endmacro %}{{ f() }}")

        with pytest.raises(TemplateExecutionError) as exc_info:
            render_binding(binding, ImportManager())

        assert exc_info.value.template == "Foo"
        assert "RecursionError" in exc_info.value.diagnostic

    def test_go_style_add_import(self, bind):
        imports = ImportManager()

        text = render_binding(
            bind('{{ AddImport("fmt") }}{{ ctx.AddImport("strings") }}x'), imports
        ).text

        assert text == "x"
        assert imports.finalize() == ["fmt", "strings"]
