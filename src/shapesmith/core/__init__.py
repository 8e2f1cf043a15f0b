"""Core shape algorithms for shapesmith.

This module contains the shape generation pipeline:

- Shape generation (regular polygons, circles, spokes, partial arcs)
- Shape composition (inserting generated shapes into point sequences)
- Ring expansion (scaled copies of a shape around a center)
- Corner rounding (quadratic Bezier corners)
- Convex decomposition (ear clipping with Hertel-Mehlhorn merging)

All functions are pure and return new immutable shapes. The
ShapeController ties them together behind a tick-driven state machine.

Key functions:
- create_shape: Generate a shape from a vertex count and sizes
- add_shape: Insert a generated shape into a point sequence
- add_ring: Append a scaled ring to a shape
- add_rounded_corners: Round a range of corners
- round_corners_at: Round the corners at given indices
- decompose: Split a simple polygon into convex pieces

Key classes:
- ShapeController: Owns settings, caches and exports the derived shape
"""

from shapesmith.core.controller import (
    ControllerState,
    ExportReport,
    ShapeController,
    ShapeObserver,
)
from shapesmith.core.corners import add_rounded_corners, resolve_corner_detail, round_corners_at
from shapesmith.core.decomposer import decompose
from shapesmith.core.generator import add_shape, create_shape, resolve_vertices_count
from shapesmith.core.geometry import is_convex, signed_area
from shapesmith.core.ring import add_ring

__all__ = [
    # Controller
    "ControllerState",
    "ExportReport",
    "ShapeController",
    "ShapeObserver",
    # Shape operations
    "add_ring",
    "add_rounded_corners",
    "add_shape",
    "create_shape",
    "decompose",
    "resolve_corner_detail",
    "resolve_vertices_count",
    "round_corners_at",
    # Geometry functions
    "is_convex",
    "signed_area",
]
