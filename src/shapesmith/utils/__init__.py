"""Utility functions for shapesmith.

This module provides utility functions including:

- Logging setup and configuration
- Generation and export statistics
"""

from shapesmith.utils.logging import (
    GenerationLogger,
    GenerationStats,
    configure_logging,
)

__all__ = [
    "GenerationLogger",
    "GenerationStats",
    "configure_logging",
]
