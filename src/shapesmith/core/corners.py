"""Corner rounding with quadratic Bezier curves.

A rounded corner replaces a vertex V with points on the quadratic Bezier
curve whose control point is V and whose endpoints lie on the two edges
meeting at V, `corner_size` away from it.

Corner sizes are clamped rather than rejected: an edge between two rounded
corners gives each of them at most half of its length, so neighbouring
curves never overlap. An edge towards a vertex that is not rounded can be
used whole, unless `limit_ending_slopes` is set.
"""

from collections.abc import Iterable, Sequence

from shapesmith.core._bezier import sample_quadratic
from shapesmith.domain import CornerRange, Point, Shape
from shapesmith.exceptions import InvalidParameterError

DEFAULT_DETAIL_BUDGET = 32
_SIZE_EPSILON = 1e-9


def resolve_corner_detail(
    corner_detail: int,
    vertices_count: int,
    detail_budget: int = DEFAULT_DETAIL_BUDGET,
) -> int:
    """Resolve a corner detail of 0 to a share of the detail budget.

    Args:
        corner_detail: Requested points per corner; 0 selects the default
        vertices_count: Number of vertices sharing the budget
        detail_budget: Points to spread over the whole shape

    Returns:
        Number of points per corner, at least 1

    Raises:
        InvalidParameterError: If the detail is negative, or is 0 and no
            default can be derived
    """
    if corner_detail < 0:
        raise InvalidParameterError(
            "corner_detail", f"must not be negative, got {corner_detail}"
        )
    if corner_detail > 0:
        return corner_detail
    if vertices_count <= 0 or detail_budget <= 0:
        raise InvalidParameterError(
            "corner_detail", "a default detail needs a positive vertex count and budget"
        )
    return max(1, detail_budget // vertices_count)


def add_rounded_corners(
    shape: Sequence[Point],
    corner_size: float,
    corner_detail: int,
    start_index: int = 0,
    length: int = -1,
    limit_ending_slopes: bool = True,
    *,
    detail_budget: int = DEFAULT_DETAIL_BUDGET,
) -> Shape:
    """Return a copy of `shape` with a range of its corners rounded.

    The shape is treated as a closed polygon, so the neighbours of the
    first and last vertex wrap around.

    Args:
        shape: The base points
        corner_size: Distance along both edges, from the vertex, to where
            the rounded corner starts and ends
        corner_detail: Points per rounded corner. 0 spreads `detail_budget`
            points over the shape
        start_index: First vertex to round; negative values count from the end
        length: Number of vertices to round; -1 rounds every vertex from
            `start_index`, wrapping around
        limit_ending_slopes: Limit the first and last corner to half of the
            edges they share with unrounded vertices. No effect if the whole
            shape is rounded
        detail_budget: Points spread over the shape for a detail of 0

    Returns:
        New shape with the selected corners rounded

    Raises:
        InvalidParameterError: If corner_size or corner_detail is negative
    """
    points = list(shape)
    selected = CornerRange(start_index, length, limit_ending_slopes).indices(len(points))
    return round_corners_at(
        points,
        corner_size,
        corner_detail,
        selected,
        limit_ending_slopes,
        detail_budget=detail_budget,
    )


def round_corners_at(
    shape: Sequence[Point],
    corner_size: float,
    corner_detail: int,
    indices: Iterable[int],
    limit_ending_slopes: bool = True,
    *,
    detail_budget: int = DEFAULT_DETAIL_BUDGET,
) -> Shape:
    """Return a copy of `shape` with the corners at `indices` rounded.

    Points not listed are kept as they are, and an edge towards one of them
    is not shared with another curve.

    Raises:
        InvalidParameterError: If corner_size or corner_detail is negative
    """
    points = list(shape)
    if corner_size < 0:
        raise InvalidParameterError("corner_size", f"must not be negative, got {corner_size}")

    n = len(points)
    if n < 3:
        return Shape(tuple(points))

    detail = resolve_corner_detail(corner_detail, n, detail_budget)
    selected = {i % n for i in indices}
    if not selected or corner_size < _SIZE_EPSILON:
        return Shape(tuple(points))

    result: list[Point] = []
    for i, vertex in enumerate(points):
        if i not in selected:
            result.append(vertex)
            continue

        prev_index = (i - 1) % n
        next_index = (i + 1) % n
        size = _clamped_size(
            corner_size,
            vertex,
            points[prev_index],
            points[next_index],
            prev_limited=limit_ending_slopes or prev_index in selected,
            next_limited=limit_ending_slopes or next_index in selected,
        )
        if size < _SIZE_EPSILON:
            result.append(vertex)
            continue

        start = vertex + (points[prev_index] - vertex).normalized() * size
        end = vertex + (points[next_index] - vertex).normalized() * size
        result.extend(sample_quadratic(start, vertex, end, detail))

    return Shape(tuple(result))


def _clamped_size(
    corner_size: float,
    vertex: Point,
    prev_point: Point,
    next_point: Point,
    prev_limited: bool,
    next_limited: bool,
) -> float:
    """Clamp a corner size to the length each adjacent edge allows."""
    prev_edge = vertex.distance_to(prev_point)
    next_edge = vertex.distance_to(next_point)
    if prev_edge < _SIZE_EPSILON or next_edge < _SIZE_EPSILON:
        return 0.0

    prev_allowed = prev_edge / 2.0 if prev_limited else prev_edge
    next_allowed = next_edge / 2.0 if next_limited else next_edge
    return min(corner_size, prev_allowed, next_allowed)
