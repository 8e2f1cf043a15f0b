"""Configuration management for shapesmith.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, controller updates or
defaults.

Key classes:
- ShapeSettings: Generation parameters of a controlled shape
- TransformConfig: Offset transform settings
- ExportConfig: Export target settings
- GeometryConfig: Resolution settings
- LoggingConfig: Logging settings
- ShapesmithSettings: Main application settings
"""

from shapesmith.config.settings import (
    ExportConfig,
    GeometryConfig,
    LoggingConfig,
    ShapeSettings,
    ShapesmithSettings,
    TransformConfig,
    get_default_settings,
)

__all__ = [
    "ExportConfig",
    "GeometryConfig",
    "LoggingConfig",
    "ShapeSettings",
    "ShapesmithSettings",
    "TransformConfig",
    "get_default_settings",
]
