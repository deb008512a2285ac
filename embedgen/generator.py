# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Generation pipeline.

For one package directory: scan the Go sources, bind declarations to
templates, render every binding, assemble and format the output, and write
it. Several directories can be processed in one run; each gets its own
scanner, catalog and import manager, so they share no mutable state and
may run in parallel.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional

from .assembler import assemble_source, format_source, write_atomic
from .data import GenerationResult
from .errors import EmbedgenError, GenerationAborted, GenerationError
from .formatter import Formatter, create_formatter
from .go_parser import DeclarationScanner, is_generated_source
from .imports import ImportManager
from .resolver import resolve_bindings
from .settings import EmbedgenSettings, get_default_settings
from .templates import TemplateCatalog, render_binding

logger = logging.getLogger(__name__)


class Generator:
    """Runs the embedgen pipeline over package directories."""

    def __init__(self, settings: Optional[EmbedgenSettings] = None,
                 formatter: Optional[Formatter] = None):
        self.settings = settings or get_default_settings()
        self.formatter = formatter or create_formatter(
            self.settings.formatter, self.settings.gofmt_command
        )

    def output_path(self, directory: Path) -> Path:
        return Path(directory) / self.settings.output_filename

    def generate_directory(self, directory: Path, dry_run: bool = False) -> GenerationResult:
        """Generate the output file for one package directory.

        Either a complete, formatted file is written or nothing is. A
        directory without bindings gets no file, and a file left by an
        earlier run is removed.

        Args:
            directory: Package directory.
            dry_run: Do everything except touching the filesystem.

        Returns:
            GenerationResult describing the output.

        Raises:
            SourceParseError, TemplateParseError, TemplateExecutionError,
            OutputFormatError: Propagated from the pipeline stages.
        """
        directory = Path(directory)
        logger.info(f"Generating {directory}")

        scan = DeclarationScanner(self.settings.output_filename).scan(directory)
        catalog = TemplateCatalog(suffix=self.settings.template_suffix)
        bindings = resolve_bindings(scan.declarations, catalog)
        output_file = self.output_path(directory)

        if not bindings:
            logger.info(f"No template bindings in {directory}")
            if not dry_run:
                self._remove_stale_output(output_file)
            return GenerationResult(directory=directory)

        imports = ImportManager()
        fragments = [render_binding(binding, imports) for binding in bindings]
        finalized = imports.finalize()

        source = assemble_source(scan.package, finalized, fragments)
        formatted = format_source(source, self.formatter)

        if not dry_run:
            write_atomic(output_file, formatted)
            logger.info(f"Wrote {output_file} ({len(bindings)} bindings)")

        return GenerationResult(
            directory=directory,
            output_file=output_file,
            bindings=len(bindings),
            imports=finalized,
            source=formatted,
        )

    def _remove_stale_output(self, output_file: Path) -> None:
        if not output_file.is_file():
            return
        if not is_generated_source(output_file.read_bytes().decode("utf-8", errors="replace")):
            logger.warning(f"Leaving {output_file}: it has no generated-code marker")
            return
        output_file.unlink()
        logger.info(f"Removed stale {output_file}")

    def _generate_isolated(self, directory: Path, dry_run: bool,
                           abort: Optional[threading.Event]) -> GenerationResult:
        directory = Path(directory)
        if abort is not None and abort.is_set():
            return GenerationResult(directory=directory,
                                    error=GenerationAborted(f"{directory}: aborted"))
        try:
            return self.generate_directory(directory, dry_run=dry_run)
        except EmbedgenError as e:
            logger.debug(f"Generation failed for {directory}: {e}")
            return GenerationResult(directory=directory, error=e)
        except OSError as e:
            return GenerationResult(directory=directory,
                                    error=GenerationError(f"{directory}: {e}"))

    def run(
        self,
        directories: Iterable[Path],
        workers: Optional[int] = None,
        dry_run: bool = False,
        abort: Optional[threading.Event] = None,
    ) -> List[GenerationResult]:
        """Generate every directory independently.

        A failure in one directory is recorded in its result and does not
        affect the others. The abort event is checked before each directory
        starts. Results come back in input order.
        """
        directories = [Path(d) for d in directories]
        workers = workers or self.settings.workers

        if workers > 1 and len(directories) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(self._generate_isolated, d, dry_run, abort)
                    for d in directories
                ]
                try:
                    results = [future.result() for future in futures]
                except KeyboardInterrupt:
                    # Directories not yet started see the event and skip.
                    if abort is not None:
                        abort.set()
                    raise
        else:
            results = [self._generate_isolated(d, dry_run, abort) for d in directories]

        failed = sum(1 for r in results if not r.success)
        logger.info(f"Processed {len(results)} directories, {failed} failed")
        return results


def generate(directory: Path, settings: Optional[EmbedgenSettings] = None,
             formatter: Optional[Formatter] = None) -> GenerationResult:
    """Generate one directory, raising on failure."""
    return Generator(settings, formatter).generate_directory(Path(directory))
