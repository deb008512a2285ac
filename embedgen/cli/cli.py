# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

import click

from .constants import CLI_NAME, PACKAGE_NAME, ExitCode
from .utils import console, error, success, warning
from ..errors import ConfigurationError
from ..settings.schema import FORMATTERS, LOG_LEVELS

logger = logging.getLogger(__name__)


@dataclass
class CLIContext:
    """Options given to the top-level command."""
    config_file: Path | None = None
    log_level: str | None = None


def _version_callback(ctx, param, value):
    if not value:
        return
    import importlib.metadata
    version = importlib.metadata.version(PACKAGE_NAME)
    console.print(f"[bold]{CLI_NAME}[/bold], version {version}")
    ctx.exit()


@click.group(name=CLI_NAME, context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-c", "--config", "config_file",
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Use this config file instead of searching for embedgen.yaml")
@click.option("-l", "--log-level", type=click.Choice(LOG_LEVELS), default=None,
              metavar="LEVEL", help="Set log verbosity (quiet|normal|verbose|debug)")
@click.option("--version", is_flag=True, expose_value=False, is_eager=True,
              callback=_version_callback, help="Show the version and exit.")
@click.pass_context
def cli(ctx: click.Context, config_file: Path | None, log_level: str | None) -> None:
    """embedgen - generate Go code from templates bound by embedded types.

    \b
    A struct or interface that embeds a type named Foo is rendered with
    Foo.tmpl from the same directory. All output for a package is merged
    into one generated file.
    """
    ctx.obj = CLIContext(config_file=config_file, log_level=log_level)


@cli.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("directories", nargs=-1,
                type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-w", "--workers", type=click.IntRange(min=1), default=None,
              help="Process this many package directories in parallel")
@click.option("--formatter", type=click.Choice(FORMATTERS), default=None,
              help="gofmt, or check to validate syntax without a Go toolchain")
@click.option("--dry-run", is_flag=True,
              help="Print generated source to stdout instead of writing files")
@click.pass_context
def generate(
    ctx: click.Context,
    directories: tuple[Path, ...],
    workers: int | None,
    formatter: str | None,
    dry_run: bool,
) -> None:
    """Generate code for DIRECTORIES (default: the current directory)."""
    from .._internal.logging import setup_logging
    from ..generator import Generator
    from ..settings import load_settings

    obj: CLIContext = ctx.obj or CLIContext()
    try:
        settings = load_settings(
            obj.config_file,
            log_level=obj.log_level,
            workers=workers,
            formatter=formatter,
        )
        generator = Generator(settings)
    except ConfigurationError as e:
        error(str(e))
        ctx.exit(ExitCode.CONFIG_ERROR)

    setup_logging(settings.log_level)
    logger.debug(f"{CLI_NAME} settings: {settings.model_dump()}")

    targets = list(directories) or [Path.cwd()]
    abort = threading.Event()
    try:
        results = generator.run(targets, dry_run=dry_run, abort=abort)
    except KeyboardInterrupt:
        abort.set()
        warning("Interrupted by user")
        ctx.exit(ExitCode.INTERRUPTED)

    failed = 0
    for result in results:
        if not result.success:
            failed += 1
            error(f"{result.directory}: {result.error}")
        elif result.output_file is None:
            console.print(f"[dim]{result.directory}: no template bindings[/dim]")
        elif dry_run:
            click.echo(result.source, nl=False)
        else:
            success(f"{result.output_file} ({result.bindings} bindings)")

    if failed:
        ctx.exit(ExitCode.ERROR)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
