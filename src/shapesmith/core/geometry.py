"""Geometric helpers shared by the shape operations.

This module provides:
- Signed area calculation (shoelace formula)
- Orientation and convexity tests
- Point-in-triangle testing for ear clipping
- Scale-relative tolerances

All functions are pure and stateless.
"""

import math

from shapesmith.domain import Point


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0), Point(0.0, 1.0)]
        >>> signed_area(square)  # CCW square
        1.0
        >>> signed_area(square[::-1])  # CW square
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def orientation(a: Point, b: Point, c: Point) -> float:
    """Twice the signed area of triangle abc.

    Positive when a -> b -> c turns left (counter-clockwise).
    """
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def area_tolerance(points: list[Point], relative: float = 1e-9) -> float:
    """Area-like tolerance scaled to the extent of `points`.

    Cross products grow with the square of the coordinates, so a fixed
    epsilon is wrong for both tiny and huge shapes.
    """
    if not points:
        return relative
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    extent = math.hypot(max(xs) - min(xs), max(ys) - min(ys))
    return relative * max(extent * extent, 1.0)


def is_convex(points: list[Point], tolerance: float = 1e-9) -> bool:
    """Check whether a polygon is convex.

    Collinear vertices are accepted. The polygon must turn in a single
    direction and wind around only once.

    Args:
        points: Polygon vertices
        tolerance: Relative tolerance for collinearity

    Returns:
        True if the polygon is convex
    """
    n = len(points)
    if n < 3:
        return False

    eps = area_tolerance(points, tolerance)
    sign = 0
    turned = 0.0
    for i in range(n):
        a, b, c = points[i - 1], points[i], points[(i + 1) % n]
        cross = orientation(a, b, c)
        if abs(cross) <= eps:
            # Collinear, but a spike doubling back is not convex
            if (b - a).dot(c - b) < 0:
                return False
            continue
        current = 1 if cross > 0 else -1
        if sign == 0:
            sign = current
        elif current != sign:
            return False
        turned += math.atan2(cross, (b - a).dot(c - b))

    if sign == 0:
        return False
    # A star polygon turns the same way at every vertex but winds twice
    return abs(turned) <= 2 * math.pi + 1e-6


def point_in_triangle(p: Point, a: Point, b: Point, c: Point, eps: float = 0.0) -> bool:
    """Test whether p lies inside or on counter-clockwise triangle abc.

    Args:
        p: Point to test
        a: First triangle corner
        b: Second triangle corner
        c: Third triangle corner
        eps: Tolerance; points within it of an edge count as inside

    Returns:
        True if p is inside or on the boundary of the triangle
    """
    return (
        orientation(a, b, p) >= -eps
        and orientation(b, c, p) >= -eps
        and orientation(c, a, p) >= -eps
    )
