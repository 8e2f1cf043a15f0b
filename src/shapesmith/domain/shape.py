"""Shape types produced and consumed by the generation pipeline.

This module defines:
- Shape: An immutable ordered sequence of points
- ShapeType: Topology of a generated shape
- ClosingMethod: How the open ends of a partial arc are joined
- ArcSpec: The angular span of a shape
- CornerRange: A contiguous (possibly wrapping) range of vertices
- ConvexPartition: A shape decomposed into convex pieces
- ExportBehavior / ExecutionContext: When shapes are written to export targets
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Any

from shapesmith.domain.vector import Point, Transform2D

TAU = math.tau
ARC_EPSILON = 1e-9


class ShapeType(Enum):
    """Topology of a generated shape.

    - POLYGON: Closed, filled outline
    - POLYLINE: Outline only (a ring ratio of 0)
    - MULTILINE: Disjoint segments, stored as consecutive point pairs
    """

    POLYGON = auto()
    POLYLINE = auto()
    MULTILINE = auto()


class ClosingMethod(Enum):
    """How the ends of a shape that does not span a full circle are joined.

    - SLICE: Both ends run straight to the center
    - CHORD: The ends are joined by one straight segment
    - ARC: The shape follows its circle up to the end of the arc
    """

    SLICE = "slice"
    CHORD = "chord"
    ARC = "arc"


class ExecutionContext(Enum):
    """Context a controller runs in, used to decide whether to export."""

    EDITOR = "editor"
    RUNTIME = "runtime"


class ExportBehavior(Flag):
    """Contexts in which export targets are written."""

    DISABLED = 0
    EDITOR = auto()
    RUNTIME = auto()

    def allows(self, context: ExecutionContext) -> bool:
        """Check whether exporting is enabled for `context`."""
        if context is ExecutionContext.EDITOR:
            return bool(self & ExportBehavior.EDITOR)
        return bool(self & ExportBehavior.RUNTIME)


@dataclass(frozen=True, slots=True)
class ArcSpec:
    """Angular span of a shape, in radians.

    Attributes:
        start: Starting angle
        end: Ending angle
    """

    start: float = 0.0
    end: float = TAU

    @classmethod
    def from_degrees(cls, start: float, end: float) -> "ArcSpec":
        return cls(math.radians(start), math.radians(end))

    @property
    def angle(self) -> float:
        return self.end - self.start

    @property
    def start_degrees(self) -> float:
        return math.degrees(self.start)

    @property
    def end_degrees(self) -> float:
        return math.degrees(self.end)

    @property
    def angle_degrees(self) -> float:
        return math.degrees(self.angle)

    @property
    def is_full_circle(self) -> bool:
        """True when the arc covers at least one whole turn."""
        return abs(self.angle) >= TAU - ARC_EPSILON

    @property
    def is_empty(self) -> bool:
        return abs(self.angle) < ARC_EPSILON


@dataclass(frozen=True, slots=True)
class Shape:
    """An immutable, ordered sequence of points.

    Every shape operation returns a new Shape, so holding on to an older
    result is always safe.

    Attributes:
        points: The points, in drawing order
    """

    points: tuple[Point, ...] = ()

    @classmethod
    def of(cls, points: Iterable[Point]) -> "Shape":
        return cls(tuple(points))

    @classmethod
    def from_tuples(cls, coordinates: Iterable[tuple[float, float]]) -> "Shape":
        return cls(tuple(Point(float(x), float(y)) for x, y in coordinates))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Point:
        return self.points[index]

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Positive for counter-clockwise winding, negative for clockwise.

        Returns:
            Signed area of the shape, 0.0 for fewer than 3 points
        """
        from shapesmith.core.geometry import signed_area

        return signed_area(list(self.points))

    def area(self) -> float:
        return abs(self.signed_area())

    def is_convex(self, tolerance: float = 1e-9) -> bool:
        """Check whether the shape is a convex polygon.

        Collinear vertices are allowed. Shapes with fewer than 3 points
        are not convex.
        """
        from shapesmith.core.geometry import is_convex

        return is_convex(list(self.points), tolerance)

    def transformed(self, transform: Transform2D) -> "Shape":
        """Return a copy with `transform` applied to every point."""
        if transform.is_identity():
            return self
        return Shape(tuple(transform.xform(p) for p in self.points))

    def to_tuples(self) -> list[tuple[float, float]]:
        return [p.to_tuple() for p in self.points]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the shape
        """
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shape":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a shape

        Returns:
            Shape instance
        """
        return cls(tuple(Point.from_dict(p) for p in data["points"]))


@dataclass(frozen=True, slots=True)
class CornerRange:
    """A contiguous range of vertices to round.

    Attributes:
        start_index: First vertex; negative values count from the end
        length: Number of vertices. -1 means every vertex from
            `start_index` onwards, wrapping past the end; smaller negative
            values count back from that
        limit_ending_slopes: Limit the first and last corner of a partial
            range to half of the edge they share with unrounded vertices
    """

    start_index: int = 0
    length: int = -1
    limit_ending_slopes: bool = True

    def resolved_length(self, count: int) -> int:
        length = self.length
        if length < 0:
            length = count + length + 1
        return max(0, min(length, count))

    def indices(self, count: int) -> list[int]:
        """Resolve the range to vertex indices for a shape of `count` points.

        Args:
            count: Number of vertices in the shape

        Returns:
            Vertex indices in range order, wrapping past the end
        """
        if count <= 0:
            return []
        start = self.start_index % count
        return [(start + i) % count for i in range(self.resolved_length(count))]

    def covers_whole(self, count: int) -> bool:
        return count > 0 and self.resolved_length(count) == count


@dataclass(frozen=True, slots=True)
class ConvexPartition:
    """A shape decomposed into convex pieces.

    Attributes:
        hulls: Convex shapes whose union is the original shape
    """

    hulls: tuple[Shape, ...] = ()

    def __len__(self) -> int:
        return len(self.hulls)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.hulls)

    def __getitem__(self, index: int) -> Shape:
        return self.hulls[index]

    def area(self) -> float:
        return sum(hull.area() for hull in self.hulls)

    def to_dict(self) -> dict[str, Any]:
        return {"hulls": [hull.to_dict() for hull in self.hulls]}
