"""Convex decomposition of polygons.

Physics consumers only accept convex collision shapes, so filled shapes are
split into convex pieces:

1. Clean the outline (duplicate, collinear and spike vertices are dropped)
2. Triangulate by ear clipping, always clipping the first ear in index order
3. Merge triangles across shared diagonals while the result stays convex
   (Hertel-Mehlhorn), visiting pieces in order

Both passes are deterministic, so equal inputs give equal partitions.
Outlines that touch themselves along a zero-width bridge, as filled rings
do, are handled: vertices coincident with an ear's corners are ignored by
the ear test.
"""

from collections.abc import Sequence

from shapesmith.core.geometry import (
    area_tolerance,
    is_convex,
    orientation,
    point_in_triangle,
    signed_area,
)
from shapesmith.domain import ConvexPartition, Point, Shape
from shapesmith.exceptions import DegenerateGeometryError

_AREA_RELATIVE_TOLERANCE = 1e-6


def decompose(shape: Sequence[Point]) -> ConvexPartition:
    """Partition a polygon into convex pieces.

    Args:
        shape: Polygon outline, in either winding

    Returns:
        Convex pieces whose union is the polygon. Pieces keep the winding of
        the input. A convex input is returned as its only piece, unchanged

    Raises:
        DegenerateGeometryError: If the polygon has no area or crosses itself
    """
    points = list(shape)
    if is_convex(points) and abs(signed_area(points)) > area_tolerance(points):
        return ConvexPartition((Shape(tuple(points)),))

    cleaned = _clean(points)
    if len(cleaned) < 3:
        raise DegenerateGeometryError(
            f"polygon has {len(cleaned)} usable vertices after cleaning"
        )

    area = signed_area(cleaned)
    eps = area_tolerance(cleaned)
    if abs(area) <= eps:
        raise DegenerateGeometryError("polygon has zero area")

    clockwise = area < 0
    if clockwise:
        cleaned.reverse()

    triangles = _ear_clip(cleaned, eps)

    triangulated_area = sum(
        orientation(cleaned[a], cleaned[b], cleaned[c]) / 2.0 for a, b, c in triangles
    )
    if abs(triangulated_area - abs(area)) > _AREA_RELATIVE_TOLERANCE * abs(area):
        raise DegenerateGeometryError("polygon intersects itself")

    pieces = _merge_convex([list(t) for t in triangles], cleaned, eps)

    hulls = []
    for piece in pieces:
        hull = [cleaned[i] for i in piece]
        if clockwise:
            hull.reverse()
        hulls.append(Shape(tuple(hull)))
    return ConvexPartition(tuple(hulls))


def _clean(points: list[Point]) -> list[Point]:
    """Drop consecutive duplicates, collinear vertices and zero-width spikes."""
    eps = area_tolerance(points)
    cleaned = list(points)

    changed = True
    while changed and len(cleaned) >= 3:
        changed = False
        i = 0
        while i < len(cleaned) and len(cleaned) >= 3:
            prev_point = cleaned[i - 1]
            point = cleaned[i]
            next_point = cleaned[(i + 1) % len(cleaned)]
            if point.is_close(prev_point) or abs(orientation(prev_point, point, next_point)) <= eps:
                del cleaned[i]
                changed = True
                continue
            i += 1

    return cleaned


def _ear_clip(points: list[Point], eps: float) -> list[tuple[int, int, int]]:
    """Triangulate a counter-clockwise polygon, returning index triples."""
    remaining = list(range(len(points)))
    triangles: list[tuple[int, int, int]] = []

    while len(remaining) > 3:
        ear = _find_ear(points, remaining, eps)
        if ear is None:
            raise DegenerateGeometryError("no ear found, polygon intersects itself")
        count = len(remaining)
        triangles.append(
            (remaining[(ear - 1) % count], remaining[ear], remaining[(ear + 1) % count])
        )
        del remaining[ear]

    a, b, c = remaining
    if orientation(points[a], points[b], points[c]) > eps:
        triangles.append((a, b, c))
    return triangles


def _find_ear(points: list[Point], remaining: list[int], eps: float) -> int | None:
    count = len(remaining)
    for position in range(count):
        a = points[remaining[(position - 1) % count]]
        b = points[remaining[position]]
        c = points[remaining[(position + 1) % count]]

        if orientation(a, b, c) <= eps:
            # Reflex or flat; clipping it would add an inverted triangle
            continue

        if not _triangle_is_empty(points, remaining, (a, b, c), eps):
            continue
        return position
    return None


def _triangle_is_empty(
    points: list[Point],
    remaining: list[int],
    triangle: tuple[Point, Point, Point],
    eps: float,
) -> bool:
    a, b, c = triangle
    for index in remaining:
        p = points[index]
        # Bridge vertices can coincide with the ear's own corners
        if p.is_close(a) or p.is_close(b) or p.is_close(c):
            continue
        # Reflex vertices touching the diagonal count as inside
        if point_in_triangle(p, a, b, c, eps):
            return False
    return True


def _merge_convex(
    pieces: list[list[int]], points: list[Point], eps: float
) -> list[list[int]]:
    """Merge pieces across shared diagonals while the result stays convex."""
    owner: dict[tuple[int, int], int] = {}
    for index, piece in enumerate(pieces):
        for edge in _edges(piece):
            owner[edge] = index

    alive: list[list[int] | None] = list(pieces)
    for index in range(len(alive)):
        merged = True
        while merged and alive[index] is not None:
            merged = False
            piece = alive[index]
            for a, b in _edges(piece):
                other = owner.get((b, a))
                if other is None or other == index:
                    continue
                neighbour = alive[other]
                candidate = _join(piece, neighbour, a, b)
                if not _is_convex_indices(candidate, points, eps):
                    continue

                del owner[(a, b)]
                del owner[(b, a)]
                for edge in _edges(neighbour):
                    if edge in owner:
                        owner[edge] = index
                alive[index] = candidate
                alive[other] = None
                merged = True
                break

    return [piece for piece in alive if piece is not None]


def _edges(piece: list[int]) -> list[tuple[int, int]]:
    return [(piece[k], piece[(k + 1) % len(piece)]) for k in range(len(piece))]


def _join(first: list[int], second: list[int], a: int, b: int) -> list[int]:
    """Join two pieces sharing edge (a, b) in `first` and (b, a) in `second`."""
    n = len(first)
    m = len(second)
    i = first.index(b)
    j = second.index(a)
    # Walk first from b round to a, then second past a round to before b
    joined = [first[(i + k) % n] for k in range(n)]
    joined.extend(second[(j + 1 + k) % m] for k in range(m - 2))
    return joined


def _is_convex_indices(piece: list[int], points: list[Point], eps: float) -> bool:
    n = len(piece)
    for k in range(n):
        a = points[piece[k - 1]]
        b = points[piece[k]]
        c = points[piece[(k + 1) % n]]
        if orientation(a, b, c) < -eps:
            return False
    return True
