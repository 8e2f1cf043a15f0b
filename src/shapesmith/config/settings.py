"""Configuration settings for Shapesmith."""

import math
from pathlib import Path

from pydantic import BaseModel, Field

from shapesmith.domain import (
    TAU,
    ArcSpec,
    ClosingMethod,
    CornerRange,
    ExportBehavior,
    Point,
    Transform2D,
)


class GeometryConfig(BaseModel):
    """Resolution and tolerance settings shared by the shape operations."""

    circle_detail: int = Field(
        default=32,
        ge=3,
        le=1024,
        description="Vertices used for a vertex count of 1 and per turn of an arc closing",
    )
    detail_budget: int = Field(
        default=32,
        ge=1,
        le=4096,
        description="Corner points spread over the shape when corner detail is 0",
    )


class TransformConfig(BaseModel):
    """Offset transform applied to the generated shape."""

    position: tuple[float, float] = Field(default=(0.0, 0.0), description="Offset position")
    rotation: float = Field(default=0.0, description="Offset rotation, in radians")
    scale: tuple[float, float] = Field(default=(1.0, 1.0), description="Offset scale")
    skew: float = Field(default=0.0, description="Offset skew, in radians")

    @property
    def rotation_degrees(self) -> float:
        return math.degrees(self.rotation)

    def to_transform(self) -> Transform2D:
        """Build the affine transform described by this configuration."""
        return Transform2D.from_components(
            position=Point(*self.position),
            rotation=self.rotation,
            scale=Point(*self.scale),
            skew=self.skew,
        )


class ExportConfig(BaseModel):
    """Configuration for writing shapes to export targets.

    Changing only these settings re-exports the cached shape without
    regenerating it.
    """

    behavior: ExportBehavior = Field(
        default=ExportBehavior.DISABLED,
        description="Contexts (editor and/or runtime) in which targets are written",
    )
    as_decomposed_hulls: bool = Field(
        default=False,
        description="Write the convex partition instead of the shape",
    )
    targets: tuple[str, ...] = Field(
        default=(),
        description="Export target identifiers, resolved at export time",
    )
    auto_dispose: bool = Field(
        default=False,
        description="Dispose the controller after its first runtime export",
    )


class ShapeSettings(BaseModel):
    """Generation parameters for a controlled shape.

    Empty sizes and negative corner details are accepted here and rejected
    when the shape is generated, so a bad value never replaces the last
    good shape.
    """

    vertices_count: int = Field(
        default=4,
        ge=1,
        description="Vertices of the base shape; 1 is a circle, 2 draws spokes",
    )
    sizes: tuple[float, ...] = Field(
        default=(10.0,),
        description="Distance from the center to each vertex, cycled through",
    )
    ring_ratio: float = Field(
        default=1.0,
        description="Ring thickness relative to the size; 0 is an outline, negative grows outwards",
    )
    corner_size: float = Field(default=0.0, ge=0.0, description="Corner rounding distance")
    corner_detail: int = Field(default=0, description="Points per corner; 0 uses the detail budget")
    corner_start: int = Field(default=0, description="First corner to round")
    corner_length: int = Field(default=-1, description="Corners to round; -1 rounds all")
    limit_ending_slopes: bool = Field(
        default=True,
        description="Limit the first and last corner of a partial range to half their edges",
    )
    arc_start: float = Field(default=0.0, description="Arc start, in radians")
    arc_angle: float = Field(default=TAU, description="Arc angle, in radians")
    closing_method: ClosingMethod = Field(
        default=ClosingMethod.SLICE,
        description="How the ends of a partial arc are joined",
    )
    round_arc_ends: bool = Field(
        default=False,
        description="Also round the corners cut out by a partial arc",
    )
    offset: TransformConfig = Field(default_factory=TransformConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)

    @property
    def arc_end(self) -> float:
        return self.arc_start + self.arc_angle

    @property
    def arc_start_degrees(self) -> float:
        return math.degrees(self.arc_start)

    @property
    def arc_angle_degrees(self) -> float:
        return math.degrees(self.arc_angle)

    @property
    def arc_end_degrees(self) -> float:
        return math.degrees(self.arc_end)

    @property
    def arc(self) -> ArcSpec:
        return ArcSpec(self.arc_start, self.arc_end)

    @property
    def corner_range(self) -> CornerRange:
        return CornerRange(self.corner_start, self.corner_length, self.limit_ending_slopes)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ShapesmithSettings(BaseModel):
    """Main application settings."""

    shape: ShapeSettings = Field(default_factory=ShapeSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ShapesmithSettings:
    """Get default application settings."""
    return ShapesmithSettings()
