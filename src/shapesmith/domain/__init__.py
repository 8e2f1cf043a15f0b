"""Domain models for shapesmith.

This module contains the value types the generation pipeline works with.
All models are immutable (frozen dataclasses) so results can be shared
freely between the controller and its consumers.

Key classes:
- Point: A 2D point/vector
- Transform2D: An affine offset transform
- Shape: An ordered sequence of points
- ConvexPartition: A shape decomposed into convex pieces
- ArcSpec, CornerRange: Generation parameters with derived helpers
"""

from shapesmith.domain.shape import (
    TAU,
    ArcSpec,
    ClosingMethod,
    ConvexPartition,
    CornerRange,
    ExecutionContext,
    ExportBehavior,
    Shape,
    ShapeType,
)
from shapesmith.domain.vector import ORIGIN, Point, Transform2D

__all__: list[str] = [
    "ORIGIN",
    "TAU",
    # Enums
    "ClosingMethod",
    "ExecutionContext",
    "ExportBehavior",
    "ShapeType",
    # Core types
    "ArcSpec",
    "ConvexPartition",
    "CornerRange",
    "Point",
    "Shape",
    "Transform2D",
]
