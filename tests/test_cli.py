# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for the embedgen command line."""

import pytest
from click.testing import CliRunner

from embedgen.cli import cli
from embedgen.cli.constants import ExitCode


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def package(make_package, bar_source):
    return make_package({"bar.go": bar_source, "Foo.tmpl": "// for {{ name }}\n"})


class TestGenerateCommand:

    def test_generates_file(self, runner, package):
        result = runner.invoke(cli, ["generate", "--formatter", "check", str(package)])

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert "// for Bar" in (package / "embedgen_gen.go").read_text()

    def test_defaults_to_current_directory(self, runner, package, monkeypatch):
        monkeypatch.chdir(package)

        result = runner.invoke(cli, ["generate", "--formatter", "check"])

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert (package / "embedgen_gen.go").exists()

    def test_dry_run_prints_source(self, runner, package):
        result = runner.invoke(cli, ["generate", "--formatter", "check", "--dry-run", str(package)])

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert "// for Bar" in result.stdout
        assert not (package / "embedgen_gen.go").exists()

    def test_failure_exit_code(self, runner, make_package, bar_source, package):
        broken = make_package({"bar.go": bar_source, "Foo.tmpl": "{{ missing }}"}, name="broken")

        result = runner.invoke(
            cli, ["generate", "--formatter", "check", "-w", "2", str(package), str(broken)]
        )

        assert result.exit_code == ExitCode.ERROR
        assert "missing" in result.output
        assert (package / "embedgen_gen.go").exists()

    def test_no_bindings_is_success(self, runner, make_package):
        directory = make_package({"a.go": "package models\n\ntype A struct{}\n"})

        result = runner.invoke(cli, ["generate", "--formatter", "check", str(directory)])

        assert result.exit_code == ExitCode.SUCCESS
        assert "no template bindings" in result.output

    def test_long_paths_are_not_wrapped(self, runner, make_package):
        directory = make_package({"a.go": "package models\n\ntype A struct{}\n"}, name="m" * 100)

        result = runner.invoke(cli, ["generate", "--formatter", "check", str(directory)])

        assert f"{directory}: no template bindings" in result.output

    def test_invalid_config_file(self, runner, package, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("workers: 0\n")

        result = runner.invoke(cli, ["-c", str(config), "generate", str(package)])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "workers" in result.output

    def test_config_file_selects_formatter(self, runner, package, tmp_path):
        config = tmp_path / "embedgen.yaml"
        config.write_text("formatter: check\noutput_filename: models_gen.go\n")

        result = runner.invoke(cli, ["--config", str(config), "generate", str(package)])

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert (package / "models_gen.go").exists()

    def test_nonexistent_directory(self, runner, tmp_path):
        result = runner.invoke(cli, ["generate", str(tmp_path / "missing")])

        assert result.exit_code == 2

    def test_zero_workers_rejected(self, runner, package):
        result = runner.invoke(cli, ["generate", "-w", "0", str(package)])

        assert result.exit_code == 2


class TestTopLevel:

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "generate" in result.output
