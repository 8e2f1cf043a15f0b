"""Shapesmith - Procedural 2D shape generation.

Shapesmith turns compact parametric descriptions (vertex count, radial sizes,
arc bounds, corner rounding, ring proportions) into concrete point sequences
for rendering and physics, including decomposition into convex pieces.

Example:
    $ shapesmith --vertices 6 --size 10 --export hexagon.svg

This will write a regular hexagon of radius 10 to hexagon.svg.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
