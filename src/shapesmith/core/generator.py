"""Base shape generation.

Builds point sequences from radial parameters:
- create_shape: Regular, star, pie-slice and spoke shapes from an arc
- add_shape: Insert a generated shape into an existing point sequence
"""

import math
from collections.abc import Sequence

from shapesmith.domain import (
    ORIGIN,
    TAU,
    ArcSpec,
    ClosingMethod,
    Point,
    Shape,
    Transform2D,
)
from shapesmith.exceptions import InsertionIndexError, InvalidParameterError

DEFAULT_CIRCLE_DETAIL = 32
SPOKES_VERTICES_COUNT = 2


def resolve_vertices_count(vertices_count: int, circle_detail: int = DEFAULT_CIRCLE_DETAIL) -> int:
    """Map the special vertex count of 1 to the smooth circle detail."""
    if vertices_count < 1:
        raise InvalidParameterError(
            "vertices_count", f"must be at least 1, got {vertices_count}"
        )
    if vertices_count == 1:
        return circle_detail
    return vertices_count


def _check_sizes(sizes: Sequence[float]) -> None:
    if len(sizes) == 0:
        raise InvalidParameterError("sizes", "at least one size is required")


def create_shape(
    vertices_count: int,
    sizes: Sequence[float],
    offset_transform: Transform2D | None = None,
    arc_start: float = 0.0,
    arc_end: float = TAU,
    add_central_point: bool = True,
    *,
    closing_method: ClosingMethod | None = None,
    circle_detail: int = DEFAULT_CIRCLE_DETAIL,
) -> Shape:
    """Create the shape described by the parameters.

    Vertex i sits at angle ``arc_start + i * (arc_end - arc_start) / n``,
    at a distance of ``sizes[i % len(sizes)]`` from the center, and is then
    moved by `offset_transform`.

    Args:
        vertices_count: Number of vertices. 1 uses `circle_detail` vertices;
            2 creates one spoke from the center per size
        sizes: Distances from the center, cycled through per vertex
        offset_transform: Transform applied to every point
        arc_start: Starting angle of the arc, in radians
        arc_end: Ending angle of the arc, in radians
        add_central_point: Append the center point. Ignored when the arc is
            a full circle
        closing_method: With ClosingMethod.ARC and a partial arc, points are
            added along the circle up to `arc_end`
        circle_detail: Vertices used for a vertex count of 1, and the
            per-turn resolution of arc closing points

    Returns:
        The generated shape

    Raises:
        InvalidParameterError: If sizes is empty or vertices_count < 1
    """
    _check_sizes(sizes)
    count = resolve_vertices_count(vertices_count, circle_detail)
    transform = offset_transform or Transform2D.identity()
    arc = ArcSpec(arc_start, arc_end)

    if vertices_count == SPOKES_VERTICES_COUNT:
        return _create_spokes(sizes, arc).transformed(transform)

    if arc.is_empty:
        return Shape((transform.xform(Point.from_angle(arc.start, sizes[0])),))

    step = arc.angle / count
    points = [
        Point.from_angle(arc.start + i * step, sizes[i % len(sizes)])
        for i in range(count)
    ]

    if not arc.is_full_circle:
        if closing_method is ClosingMethod.ARC:
            end_size = sizes[count % len(sizes)]
            points.extend(
                _arc_closing_points(
                    start_angle=arc.start + (count - 1) * step,
                    end_angle=arc.end,
                    start_size=sizes[(count - 1) % len(sizes)],
                    end_size=end_size,
                    circle_detail=circle_detail,
                )
            )
        if add_central_point:
            points.append(ORIGIN)

    return Shape(tuple(points)).transformed(transform)


def _create_spokes(sizes: Sequence[float], arc: ArcSpec) -> Shape:
    """Create one center-to-tip segment per size, as consecutive pairs."""
    step = arc.angle / len(sizes)
    points: list[Point] = []
    for i, size in enumerate(sizes):
        points.append(ORIGIN)
        points.append(Point.from_angle(arc.start + i * step, size))
    return Shape(tuple(points))


def _arc_closing_points(
    start_angle: float,
    end_angle: float,
    start_size: float,
    end_size: float,
    circle_detail: int,
) -> list[Point]:
    """Points following the circle after the last vertex, ending on the arc end.

    The radius is interpolated from the last vertex towards the size the next
    vertex would have had.
    """
    remaining = end_angle - start_angle
    steps = max(1, math.ceil(circle_detail * abs(remaining) / TAU))
    points = []
    for k in range(1, steps + 1):
        t = k / steps
        size = start_size + (end_size - start_size) * t
        points.append(Point.from_angle(start_angle + remaining * t, size))
    return points


def add_shape(
    points: Sequence[Point],
    start: int,
    vertices_count: int,
    sizes: Sequence[float],
    offset_transform: Transform2D | None = None,
    arc_start: float = 0.0,
    arc_end: float = TAU,
    add_central_point: bool = True,
    *,
    closing_method: ClosingMethod | None = None,
    circle_detail: int = DEFAULT_CIRCLE_DETAIL,
) -> Shape:
    """Create a shape and insert it into a copy of `points` at index `start`.

    The generated points are inserted, not written over existing ones, so
    the result holds every original point in its original order.

    Args:
        points: Point sequence to insert into; left untouched
        start: Insertion index, within [0, len(points)]
        vertices_count: See create_shape
        sizes: See create_shape
        offset_transform: See create_shape
        arc_start: See create_shape
        arc_end: See create_shape
        add_central_point: See create_shape
        closing_method: See create_shape
        circle_detail: See create_shape

    Returns:
        New shape with the generated points spliced in

    Raises:
        InsertionIndexError: If start is outside [0, len(points)]
        InvalidParameterError: If the generation parameters are invalid
    """
    base = list(points)
    if not 0 <= start <= len(base):
        raise InsertionIndexError(start, len(base))

    generated = create_shape(
        vertices_count,
        sizes,
        offset_transform,
        arc_start,
        arc_end,
        add_central_point,
        closing_method=closing_method,
        circle_detail=circle_detail,
    )
    return Shape(tuple(base[:start]) + generated.points + tuple(base[start:]))
