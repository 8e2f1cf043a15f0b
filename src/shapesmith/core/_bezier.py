"""Internal quadratic Bezier helpers.

This is an internal module used by the corner rounder.
Not intended for public use.
"""

from shapesmith.domain import Point


def quadratic_point(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    """Evaluate a quadratic Bezier curve at parameter t.

    Args:
        p0: Start point
        p1: Control point
        p2: End point
        t: Curve parameter in [0, 1]

    Returns:
        Point on the curve
    """
    u = 1.0 - t
    a = u * u
    b = 2.0 * u * t
    c = t * t
    return Point(
        a * p0.x + b * p1.x + c * p2.x,
        a * p0.y + b * p1.y + c * p2.y,
    )


def sample_quadratic(p0: Point, p1: Point, p2: Point, count: int) -> list[Point]:
    """Sample `count` points evenly in t along a quadratic Bezier curve.

    Both endpoints are included when count >= 2. A single sample is taken
    at the middle of the curve.

    Args:
        p0: Start point
        p1: Control point
        p2: End point
        count: Number of points to return

    Returns:
        List of points along the curve
    """
    if count <= 0:
        return []
    if count == 1:
        return [quadratic_point(p0, p1, p2, 0.5)]

    last = count - 1
    # Endpoints are exact so rounded corners meet their edges precisely
    return [p0] + [quadratic_point(p0, p1, p2, k / last) for k in range(1, last)] + [p2]
