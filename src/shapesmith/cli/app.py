"""CLI application entry point for shapesmith.

This module provides the main CLI interface using Typer.
"""

import math
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from shapesmith import __version__
from shapesmith.cli.output import (
    console,
    print_error,
    print_export_report,
    print_header,
    print_partition_info,
    print_points,
    print_shape_info,
    print_step,
    print_success,
)
from shapesmith.config import (
    ExportConfig,
    GeometryConfig,
    LoggingConfig,
    ShapeSettings,
    TransformConfig,
)
from shapesmith.core import ShapeController
from shapesmith.domain import ClosingMethod, ExecutionContext, ExportBehavior, ShapeType
from shapesmith.exceptions import ShapesmithError
from shapesmith.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="shapesmith",
    help="Generate procedural 2D shapes and export them as JSON or SVG.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Shapesmith[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def generate(
    vertices: Annotated[
        int,
        typer.Option(
            "--vertices",
            "-n",
            help="Vertex count (1 draws a circle, 2 draws spokes)",
            min=1,
        ),
    ] = 4,
    sizes: Annotated[
        list[float] | None,
        typer.Option(
            "--size",
            "-s",
            help="Vertex distance from the center; repeat to cycle through sizes",
        ),
    ] = None,
    ring_ratio: Annotated[
        float,
        typer.Option(
            "--ring-ratio",
            "-r",
            help="Ring thickness relative to the size (1 fills, 0 outlines)",
        ),
    ] = 1.0,
    corner_size: Annotated[
        float,
        typer.Option(
            "--corner-size",
            "-c",
            help="Corner rounding distance",
            min=0.0,
        ),
    ] = 0.0,
    corner_detail: Annotated[
        int,
        typer.Option(
            "--corner-detail",
            help="Points per rounded corner (0 spreads the detail budget)",
            min=0,
        ),
    ] = 0,
    corner_start: Annotated[
        int,
        typer.Option("--corner-start", help="First corner to round"),
    ] = 0,
    corner_length: Annotated[
        int,
        typer.Option("--corner-length", help="Number of corners to round (-1 for all)"),
    ] = -1,
    arc_start: Annotated[
        float,
        typer.Option("--arc-start", help="Arc start, in degrees"),
    ] = 0.0,
    arc_angle: Annotated[
        float,
        typer.Option("--arc-angle", help="Arc angle, in degrees"),
    ] = 360.0,
    closing: Annotated[
        str,
        typer.Option(
            "--closing",
            help="How partial arcs are closed (slice|chord|arc)",
        ),
    ] = "slice",
    round_arc_ends: Annotated[
        bool,
        typer.Option("--round-arc-ends", help="Round the corners at the arc ends too"),
    ] = False,
    rotation: Annotated[
        float,
        typer.Option("--rotation", help="Offset rotation, in degrees"),
    ] = 0.0,
    circle_detail: Annotated[
        int,
        typer.Option("--circle-detail", help="Vertices used for circles", min=3, max=1024),
    ] = 32,
    export: Annotated[
        list[str] | None,
        typer.Option(
            "--export",
            "-e",
            help="Export target (.json or .svg path); repeat for several targets",
        ),
    ] = None,
    hulls: Annotated[
        bool,
        typer.Option("--hulls", help="Decompose into convex hulls and export those"),
    ] = False,
    show_points: Annotated[
        bool,
        typer.Option("--points", help="Print the generated points"),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
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
    """Generate a shape and optionally export it.

    Example:
        shapesmith -n 6 -s 10 -r 0.5 -c 2 -e hexagon.svg

    This will create hexagon.svg with a rounded hexagonal ring.
    """
    try:
        closing_method = ClosingMethod(closing.lower())
    except ValueError:
        print_error(
            f"Invalid closing method: {closing}",
            details="Valid values: slice, chord, arc",
        )
        raise typer.Exit(code=1)

    logging_config = LoggingConfig(log_file=log_file, log_level=log_level)
    configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
        quiet=quiet,
    )

    targets = list(export or [])
    try:
        settings = ShapeSettings(
            vertices_count=vertices,
            sizes=list(sizes) if sizes else [10.0],
            ring_ratio=ring_ratio,
            corner_size=corner_size,
            corner_detail=corner_detail,
            corner_start=corner_start,
            corner_length=corner_length,
            arc_start=math.radians(arc_start),
            arc_angle=math.radians(arc_angle),
            closing_method=closing_method,
            round_arc_ends=round_arc_ends,
            offset=TransformConfig(rotation=math.radians(rotation)),
            export=ExportConfig(
                behavior=ExportBehavior.RUNTIME if targets else ExportBehavior.DISABLED,
                as_decomposed_hulls=hulls,
                targets=targets,
            ),
            geometry=GeometryConfig(circle_detail=circle_detail),
        )
    except ValidationError as e:
        print_error("Invalid parameters", details=str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        print_step("Generating shape")

    controller = ShapeController(settings, context=ExecutionContext.RUNTIME)
    try:
        controller.flush()
        error = controller.last_error
        if error is not None or controller.shape is None or controller.shape_type is None:
            print_error(f"Could not generate shape: {error}")
            raise typer.Exit(code=1)

        shape = controller.shape
        shape_type = controller.shape_type
        if not quiet:
            is_polygon = shape_type is ShapeType.POLYGON
            print_shape_info(
                shape_type=shape_type.name.lower(),
                point_count=len(shape),
                area=shape.area() if is_polygon else 0.0,
                convex=is_polygon and shape.is_convex(),
            )
            if show_points:
                print_points(shape.to_tuples())

        if hulls and not quiet:
            print_step("Decomposing")
            partition = controller.decomposed
            if partition is not None:
                largest = max((len(hull) for hull in partition), default=0)
                print_partition_info(len(partition), largest)

        report = controller.last_export_report
        if report is not None and targets and not quiet:
            print_step("Exporting")
            print_export_report(report)

        if not quiet:
            print_success(
                duration_ms=controller.stats.avg_generation_time_ms,
                written=len(report.targets_written) if report else 0,
                errors=len(report.errors) if report else 0,
            )

        if report is not None and not report.ok:
            raise typer.Exit(code=1)

    except ShapesmithError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
