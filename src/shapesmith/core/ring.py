"""Ring expansion for outline and donut topologies."""

from collections.abc import Sequence

from shapesmith.domain import ORIGIN, Point, Shape


def add_ring(
    shape: Sequence[Point],
    length_proportion: float,
    shape_center: Point = ORIGIN,
    close_ring: bool = True,
    *,
    reverse_ring: bool = False,
) -> Shape:
    """Return a copy of `shape` followed by a scaled ring of its points.

    Each new point is ``shape_center + (p - shape_center) * length_proportion``.
    A proportion of 1 duplicates the shape, 0 collapses the ring onto the
    center and negative values mirror it through the center.

    Args:
        shape: The base points
        length_proportion: Distance of the ring points from the center,
            relative to the original points
        shape_center: The center the ring is scaled around
        close_ring: Append the first point again before the ring, so the
            original outline is explicitly closed
        reverse_ring: Append the ring in reverse order, so outline and ring
            together trace one outline that can be filled

    Returns:
        New shape holding the (closed) original points and the ring
    """
    outline = list(shape)
    if close_ring and outline:
        outline.append(outline[0])

    ring = [shape_center + (p - shape_center) * length_proportion for p in outline]
    if reverse_ring:
        ring.reverse()

    return Shape(tuple(outline) + tuple(ring))
