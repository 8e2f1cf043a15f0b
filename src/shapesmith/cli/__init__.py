"""Command-line interface for shapesmith.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Every generation parameter as an option
- Export to JSON/SVG files, optionally as convex hulls
- Quiet output mode
- Detailed error reporting
"""

from shapesmith.cli.app import cli, main

__all__ = ["cli", "main"]
