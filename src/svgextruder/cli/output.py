"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from svgextruder.domain import DetailLevel, PathResult, ViewBox

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for path processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]SVG Extruder[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_document_info(name: str, view_box: ViewBox, path_count: int) -> None:
    """Print SVG document information.

    Args:
        name: Path or label of the document
        view_box: Document viewBox
        path_count: Number of path elements with data
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(name)
    console.print(line)
    console.print(
        f"  {path_count:,} paths {SYM_DOT} viewBox "
        f"{view_box.x:g} {view_box.y:g} {view_box.width:g} {view_box.height:g}"
    )


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_path_table(results: list[PathResult], show_ladder: bool = False) -> None:
    """Print one row per outline with its analysis and planned settings.

    Args:
        results: Per-path results in document order
        show_ladder: Add a column with the Low..Ultra curve resolutions
    """
    table = Table(show_edge=False, pad_edge=False, header_style="bold")
    table.add_column("Path")
    table.add_column("#", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Curves", justify="right")
    table.add_column("Complexity", justify="right")
    table.add_column("Resolution", justify="right")
    table.add_column("Bevel")
    if show_ladder:
        table.add_column("Ladder (L/M/H/U)")
    table.add_column("Degraded", justify="right")

    for result in results:
        if not result.ok:
            row = [Text(result.element_id), "", "", "", "", "", Text(SYM_ERR, style="red")]
            if show_ladder:
                row.append("")
            row.append(str(len(result.degraded)))
            table.add_row(*row)
            continue

        for i, (analysis, settings) in enumerate(zip(result.analyses, result.settings)):
            bevel = f"{settings.bevel_segments} seg" if settings.bevel_enabled else "-"
            row = [
                Text(result.element_id if i == 0 else ""),
                str(i),
                str(analysis.point_count),
                str(analysis.curve_command_count),
                f"{analysis.complexity_score:g}",
                str(settings.curve_resolution),
                bevel,
            ]
            if show_ladder:
                row.append(_format_ladder(result, i))
            row.append(str(len(result.degraded)) if i == 0 else "")
            table.add_row(*row)

    console.print(table)


def _format_ladder(result: PathResult, outline_index: int) -> str:
    if not result.ladders:
        return "-"
    return "/".join(
        str(result.rung(outline_index, level).settings.curve_resolution) for level in DetailLevel
    )


def print_path_errors(failed: list[PathResult], verbose: bool) -> None:
    """Print the paths that failed.

    Args:
        failed: Failed path results
        verbose: Show every failure instead of the first ten
    """
    if not failed:
        return
    console.print(f"\n[bold red]{len(failed)} paths failed[/bold red]")
    shown = failed if verbose else failed[:10]
    for result in shown:
        line = Text(f"  {SYM_ERR} ", style="red")
        line.append(f"{result.element_id}: ", style="bold")
        line.append(result.error or "unknown error")
        console.print(line)
    if len(failed) > len(shown):
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(failed) - len(shown)} more)")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    total_time_s: float,
    processed: int,
    outlines: int,
    degraded: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        total_time_s: Total processing time in seconds
        processed: Number of paths processed
        outlines: Total number of outlines built
        degraded: Number of arcs flattened as straight lines
        errors: Number of paths that failed
        avg_time_ms: Average processing time per path in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} paths {SYM_DOT} {outlines} outlines {SYM_DOT} "
        f"{degraded} degraded arcs {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg per path")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress paths")


def print_cancellation_summary(processed: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of paths processed before cancellation
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} paths completed")
