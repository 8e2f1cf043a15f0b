"""Vector and affine transform primitives.

This module defines the two foundational value types:
- Point: An immutable 2D coordinate with vector arithmetic
- Transform2D: An affine transform (translation, rotation, scale, skew)
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Point":
        return Point(self.x / divisor, self.y / divisor)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> "Point":
        """Create a vector pointing along `angle` (radians) with the given length."""
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def normalized(self) -> "Point":
        """Return the unit vector in the same direction.

        The zero vector normalizes to itself.
        """
        length = self.length()
        if length == 0.0:
            return self
        return Point(self.x / length, self.y / length)

    def angle(self) -> float:
        """Angle of the vector from the positive x axis, in radians."""
        return math.atan2(self.y, self.x)

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> float:
        """Z component of the 3D cross product of the two vectors."""
        return self.x * other.y - self.y * other.x

    def is_close(self, other: "Point", tolerance: float = 1e-9) -> bool:
        """Check whether both coordinates match within `tolerance`."""
        return abs(self.x - other.x) <= tolerance and abs(self.y - other.y) <= tolerance

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"])


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Transform2D:
    """A 2D affine transform.

    Stored as two basis vectors and an origin, so a point p maps to
    ``x_axis * p.x + y_axis * p.y + origin``.

    Attributes:
        x_axis: Image of the unit x vector
        y_axis: Image of the unit y vector
        origin: Translation
    """

    x_axis: Point = Point(1.0, 0.0)
    y_axis: Point = Point(0.0, 1.0)
    origin: Point = ORIGIN

    @classmethod
    def identity(cls) -> "Transform2D":
        return cls()

    @classmethod
    def from_components(
        cls,
        position: Point = ORIGIN,
        rotation: float = 0.0,
        scale: Point = Point(1.0, 1.0),
        skew: float = 0.0,
    ) -> "Transform2D":
        """Compose a transform from position, rotation, scale and skew.

        Rotation and skew are in radians. Skew tilts the y axis away from
        its rotated position, leaving the x axis untouched.

        Args:
            position: Translation applied last
            rotation: Rotation of the x axis
            scale: Per-axis scale factors
            skew: Additional rotation of the y axis

        Returns:
            The composed transform
        """
        x_axis = Point(math.cos(rotation), math.sin(rotation)) * scale.x
        y_axis = Point(-math.sin(rotation + skew), math.cos(rotation + skew)) * scale.y
        return cls(x_axis=x_axis, y_axis=y_axis, origin=position)

    def xform(self, point: Point) -> Point:
        """Apply the transform to a point."""
        return Point(
            self.x_axis.x * point.x + self.y_axis.x * point.y + self.origin.x,
            self.x_axis.y * point.x + self.y_axis.y * point.y + self.origin.y,
        )

    def xform_all(self, points: Iterable[Point]) -> list[Point]:
        return [self.xform(p) for p in points]

    def basis_xform(self, vector: Point) -> Point:
        """Apply the transform without its translation."""
        return Point(
            self.x_axis.x * vector.x + self.y_axis.x * vector.y,
            self.x_axis.y * vector.x + self.y_axis.y * vector.y,
        )

    def __matmul__(self, other: "Transform2D") -> "Transform2D":
        """Compose transforms: ``(a @ b).xform(p) == a.xform(b.xform(p))``."""
        return Transform2D(
            x_axis=self.basis_xform(other.x_axis),
            y_axis=self.basis_xform(other.y_axis),
            origin=self.xform(other.origin),
        )

    def is_identity(self) -> bool:
        return self == Transform2D()
