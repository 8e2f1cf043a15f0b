"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from shapesmith.core import ExportReport

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Shapesmith[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_shape_info(shape_type: str, point_count: int, area: float, convex: bool) -> None:
    """Print generated shape information.

    Args:
        shape_type: Shape topology name
        point_count: Number of points in the shape
        area: Enclosed area (0 for lines)
        convex: Whether the shape is convex
    """
    kind = "convex" if convex else "concave"
    console.print(f"  {shape_type} {SYM_DOT} {point_count} points")
    console.print(f"  area {area:,.2f} {SYM_DOT} {kind}")


def print_points(points: list[tuple[float, float]], limit: int = 12) -> None:
    """Print the first points of a shape as a table.

    Args:
        points: Shape points
        limit: Maximum number of rows
    """
    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for index, (x, y) in enumerate(points[:limit]):
        table.add_row(str(index), f"{x:.3f}", f"{y:.3f}")
    console.print(table)
    if len(points) > limit:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(points) - limit} more)")


def print_partition_info(hull_count: int, largest: int) -> None:
    """Print convex decomposition result.

    Args:
        hull_count: Number of convex hulls
        largest: Point count of the largest hull
    """
    console.print(f"  [green]{hull_count}[/green] convex hulls {SYM_DOT} largest has {largest} points")


def print_export_report(report: ExportReport) -> None:
    """Print which export targets were written.

    Args:
        report: Report of the export step
    """
    for target in report.targets_written:
        line = Text(f"  {SYM_OK} ", style="green")
        line.append(target, style="bold")
        console.print(line)
    for error in report.errors:
        line = Text(f"  {SYM_ERR} ", style="red")
        line.append(str(error))
        console.print(line)


def print_success(duration_ms: float | None, written: int, errors: int) -> None:
    """Print success message with summary.

    Args:
        duration_ms: Generation time in milliseconds
        written: Number of export targets written
        errors: Number of export targets that failed
    """
    time_str = f" in {duration_ms:.1f}ms" if duration_ms is not None else ""
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green]{time_str}")

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {written} targets written {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
