"""CLI application entry point for svgextruder.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from svgextruder import __version__
from svgextruder.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_document_info,
    print_error,
    print_header,
    print_path_errors,
    print_path_table,
    print_processing_info,
    print_step,
    print_success,
)
from svgextruder.config import (
    ExtruderSettings,
    FlattenConfig,
    LoggingConfig,
    ProcessingConfig,
)
from svgextruder.core import PathProcessor
from svgextruder.domain import DocumentResult, PathResult
from svgextruder.exceptions import SvgExtruderError, SvgLoadError
from svgextruder.io import SvgReader
from svgextruder.utils import configure_logging

EXIT_LOAD_FAILED = 1
EXIT_ALL_PATHS_FAILED = 2

# Create the Typer app
app = typer.Typer(
    name="svgextruder",
    help="Turn SVG path data into closed outlines with planned extrusion detail.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]SVG Extruder[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Turn SVG path data into closed outlines with planned extrusion detail."""


ResolutionOption = Annotated[
    int | None,
    typer.Option(
        "--resolution",
        "-r",
        help="Curve resolution used to build outlines (default: 64)",
        min=1,
        max=4096,
    ),
]
BudgetOption = Annotated[
    int | None,
    typer.Option(
        "--budget",
        "-b",
        help="Target vertex budget per outline (default: 200000)",
        min=1,
    ),
]
LadderOption = Annotated[
    bool,
    typer.Option(
        "--ladder",
        help="Show Low/Medium/High/Ultra curve resolutions per outline",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Verbose console output",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]


@app.command()
def analyze(
    input_svg: Annotated[
        Path,
        typer.Argument(
            help="Path to input SVG file",
            show_default=False,
        ),
    ],
    resolution: ResolutionOption = None,
    budget: BudgetOption = None,
    ladder: LadderOption = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto, 1 = no pool)",
            min=1,
        ),
    ] = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Analyze every path of an SVG file and plan its extrusion detail.

    Each path is parsed, its curves flattened and its subpaths closed into
    outlines. Every outline gets a complexity score and budget-planned
    settings. A path that fails is reported without stopping the others.

    Example:
        svgextruder analyze logo.svg --ladder
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    settings = _build_settings(resolution, workers, ladder, log_file, log_level)
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)
        print_step("Loading SVG")

    try:
        document = SvgReader(input_svg).load()
    except SvgLoadError as e:
        print_error(f"Could not load SVG: {e.reason}", details=str(input_svg))
        raise typer.Exit(code=EXIT_LOAD_FAILED)

    if not quiet:
        print_document_info(str(input_svg), document.view_box, document.path_count)

    if document.is_empty():
        if not quiet:
            console.print("\nNo path elements found. Nothing to analyze.")
        raise typer.Exit(code=0)

    if not quiet:
        actual_workers = workers if workers else os.cpu_count() or 1
        print_step("Processing")
        print_processing_info(actual_workers, is_auto=(workers is None))

    processor = PathProcessor(settings, logger=logger)

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task(
                    f"Processing {document.path_count} paths",
                    total=document.path_count,
                )

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                result = processor.process_document(
                    document,
                    name=str(input_svg),
                    vertex_budget=budget,
                    max_workers=workers,
                    progress_callback=update_progress,
                )
        else:
            result = processor.process_document(
                document,
                name=str(input_svg),
                vertex_budget=budget,
                max_workers=workers,
            )
    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_notice()
            print_cancellation_summary(processed=processor.stats.processed_count)
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except SvgExtruderError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    _report(result, ladder, processor, verbose, quiet)

    if result.all_failed:
        raise typer.Exit(code=EXIT_ALL_PATHS_FAILED)


@app.command()
def path(
    path_data: Annotated[
        str,
        typer.Argument(
            help="Path data, as in a <path d=...> attribute",
            show_default=False,
        ),
    ],
    resolution: ResolutionOption = None,
    budget: BudgetOption = None,
    ladder: LadderOption = False,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Analyze a single path data string.

    Example:
        svgextruder path "M0,0 C10,0 10,10 0,10 Z"
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    settings = _build_settings(resolution, 1, ladder, None, "WARNING")
    logger = configure_logging(console_level=settings.logging.log_level, quiet=quiet)
    processor = PathProcessor(settings, logger=logger)

    try:
        results = processor.process_paths([path_data], vertex_budget=budget, max_workers=1)
    except SvgExtruderError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    document = DocumentResult(name="<argument>", paths=results)
    _report(document, ladder, processor, verbose, quiet)

    if document.all_failed:
        raise typer.Exit(code=EXIT_ALL_PATHS_FAILED)


def _build_settings(
    resolution: int | None,
    workers: int | None,
    ladder: bool,
    log_file: Path | None,
    log_level: str,
) -> ExtruderSettings:
    """Create settings from CLI arguments."""
    flatten = FlattenConfig(default_resolution=resolution) if resolution else FlattenConfig()
    return ExtruderSettings(
        flatten=flatten,
        processing=ProcessingConfig(
            max_workers=workers,
            build_ladders=ladder,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper(),
        ),
    )


def _report(
    result: DocumentResult,
    ladder: bool,
    processor: PathProcessor,
    verbose: bool,
    quiet: bool,
) -> None:
    """Print the per-path table, failures and summary."""
    failed: list[PathResult] = result.failed

    if not quiet:
        print_step("Outlines")
        print_path_table(result.paths, show_ladder=ladder)

    print_path_errors(failed, verbose=verbose)

    if not quiet:
        stats = processor.stats
        print_success(
            total_time_s=stats.duration_seconds,
            processed=len(result.paths),
            outlines=stats.outline_count,
            degraded=stats.degraded_count,
            errors=len(failed),
            avg_time_ms=stats.avg_path_time_ms,
        )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
