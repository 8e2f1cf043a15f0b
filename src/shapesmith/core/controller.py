"""Shape controller: owns generation parameters and the derived shape.

The controller is a small state machine driven by a host loop:

- Changing a shape setting queues a regeneration
- Changing only export settings queues an export of the cached shape
- `flush()`, called once per tick, runs whatever is queued, so any number
  of changes within a tick cost a single regeneration

A failed regeneration keeps the last good shape, so a transient bad
parameter never makes geometry disappear for consumers.
"""

import math
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from shapesmith.config import ShapeSettings
from shapesmith.core.corners import resolve_corner_detail, round_corners_at
from shapesmith.core.decomposer import decompose
from shapesmith.core.generator import (
    SPOKES_VERTICES_COUNT,
    create_shape,
    resolve_vertices_count,
)
from shapesmith.core.ring import add_ring
from shapesmith.domain import (
    ORIGIN,
    ClosingMethod,
    ConvexPartition,
    ExecutionContext,
    Shape,
    ShapeType,
)
from shapesmith.exceptions import (
    ExportError,
    ExportTargetUnresolvedError,
    ExportWriteError,
    GeometryError,
    InvalidParameterError,
    ShapesmithError,
)
from shapesmith.io import ExportTargetRegistry
from shapesmith.utils import GenerationLogger, GenerationStats

ShapeObserver = Callable[[Shape, ConvexPartition | None, ShapeType], None]

_NESTED_SETTINGS = ("offset", "export", "geometry")
_EXPORT_SETTINGS = frozenset({"export"})


class ControllerState(Enum):
    """Pending work of a ShapeController."""

    CLEAN = auto()
    REGENERATE_PENDING = auto()
    EXPORT_PENDING = auto()


@dataclass
class ExportReport:
    """Outcome of one export step.

    Attributes:
        targets_written: Targets that received the payload
        errors: One error per target that could not be written
        can_export: Whether targets were written at all in this context
    """

    targets_written: list[str] = field(default_factory=list)
    errors: list[ExportError] = field(default_factory=list)
    can_export: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors


class ShapeController:
    """Generates, caches and exports a shape from its settings.

    Example:
        controller = ShapeController(ShapeSettings(vertices_count=6))
        controller.connect(lambda shape, hulls, shape_type: print(len(shape)))
        controller.configure(ring_ratio=0.5, corner_size=2.0)
        controller.flush()  # one regeneration for both changes
    """

    def __init__(
        self,
        settings: ShapeSettings | None = None,
        *,
        context: ExecutionContext = ExecutionContext.RUNTIME,
        registry: ExportTargetRegistry | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the controller.

        The first flush generates the initial shape.

        Args:
            settings: Generation and export settings (defaults if None)
            context: Execution context used by can_export
            registry: Registry resolving named export targets
            logger: Structured logger (module default if None)
        """
        self._settings = settings if settings is not None else ShapeSettings()
        self._context = context
        self._registry = registry if registry is not None else ExportTargetRegistry()
        self._log = GenerationLogger(logger)

        self._state = ControllerState.REGENERATE_PENDING
        self._shape: Shape | None = None
        self._shape_type: ShapeType | None = None
        self._partition: ConvexPartition | None = None
        self._last_error: ShapesmithError | None = None
        self._last_report: ExportReport | None = None
        self._observers: list[ShapeObserver] = []
        self._disposed = False

    @property
    def settings(self) -> ShapeSettings:
        return self._settings

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def context(self) -> ExecutionContext:
        return self._context

    @property
    def registry(self) -> ExportTargetRegistry:
        return self._registry

    @property
    def shape(self) -> Shape | None:
        """The last successfully generated shape."""
        return self._shape

    @property
    def shape_type(self) -> ShapeType | None:
        return self._shape_type

    @property
    def decomposed(self) -> ConvexPartition | None:
        """The last shape decomposed into convex hulls, computed on first use.

        Raises:
            DegenerateGeometryError: If the shape cannot be decomposed
        """
        if self._partition is None and self._shape is not None and self._shape_type is not None:
            self._partition = _decompose(self._shape, self._shape_type)
        return self._partition

    @property
    def last_error(self) -> ShapesmithError | None:
        """Error of the most recent failed regeneration, if any."""
        return self._last_error

    @property
    def last_export_report(self) -> ExportReport | None:
        return self._last_report

    @property
    def stats(self) -> GenerationStats:
        return self._log.stats

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def connect(self, observer: ShapeObserver) -> None:
        """Call `observer(shape, partition, shape_type)` on every export."""
        if observer not in self._observers:
            self._observers.append(observer)

    def disconnect(self, observer: ShapeObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def configure(self, **changes: Any) -> None:
        """Change settings and queue the work they require.

        Accepts ShapeSettings fields, nested sections as models or partial
        dictionaries, and the derived names ``arc_end``,
        ``arc_start_degrees``, ``arc_angle_degrees``, ``arc_end_degrees`` and
        ``offset_<field>`` / ``offset_rotation_degrees``.

        Args:
            **changes: Settings to change

        Raises:
            InvalidParameterError: If a value fails validation; the settings
                stay unchanged
            RuntimeError: If the controller was disposed
        """
        self._ensure_alive()
        data = self._settings.model_dump()
        for name, value in self._normalize(changes).items():
            if name not in data:
                raise InvalidParameterError(name, "unknown setting")
            if name in _NESTED_SETTINGS:
                if isinstance(value, BaseModel):
                    value = value.model_dump()
                data[name] = {**data[name], **value}
            else:
                data[name] = value

        try:
            updated = ShapeSettings.model_validate(data)
        except ValidationError as e:
            error = e.errors()[0]
            location = ".".join(str(part) for part in error["loc"]) or "settings"
            raise InvalidParameterError(location, error["msg"]) from e

        changed = {
            name
            for name in ShapeSettings.model_fields
            if getattr(updated, name) != getattr(self._settings, name)
        }
        if not changed:
            return

        self._settings = updated
        if changed <= _EXPORT_SETTINGS:
            self.queue_export()
        else:
            self._log.log_regenerate_queued(reason=",".join(sorted(changed)))
            self.queue_regenerate()

    def _normalize(self, changes: dict[str, Any]) -> dict[str, Any]:
        """Convert derived setting names to stored fields."""
        normalized = dict(changes)

        if "arc_start_degrees" in normalized:
            normalized["arc_start"] = math.radians(normalized.pop("arc_start_degrees"))
        if "arc_angle_degrees" in normalized:
            normalized["arc_angle"] = math.radians(normalized.pop("arc_angle_degrees"))
        if "arc_end_degrees" in normalized:
            normalized["arc_end"] = math.radians(normalized.pop("arc_end_degrees"))
        if "arc_end" in normalized:
            start = normalized.get("arc_start", self._settings.arc_start)
            normalized["arc_angle"] = normalized.pop("arc_end") - start

        if "offset_rotation_degrees" in normalized:
            normalized["offset_rotation"] = math.radians(
                normalized.pop("offset_rotation_degrees")
            )
        offset: dict[str, Any] = {}
        for name in ("position", "rotation", "scale", "skew"):
            key = f"offset_{name}"
            if key in normalized:
                offset[name] = normalized.pop(key)
        if offset:
            current = normalized.get("offset", {})
            if isinstance(current, BaseModel):
                current = current.model_dump()
            normalized["offset"] = {**current, **offset}

        return normalized

    def queue_regenerate(self) -> None:
        """Queue a regeneration (and export), replacing a queued export."""
        self._state = ControllerState.REGENERATE_PENDING

    def queue_export(self) -> None:
        """Queue an export of the cached shape, unless a regeneration is queued."""
        if self._state is ControllerState.CLEAN:
            self._state = ControllerState.EXPORT_PENDING

    def flush(self) -> bool:
        """Run the queued work. Call once per tick.

        Returns:
            True if any work was pending
        """
        if self._disposed or self._state is ControllerState.CLEAN:
            return False
        if self._state is ControllerState.REGENERATE_PENDING:
            self.regenerate()
        else:
            self.export()
        return True

    def regenerate(self) -> bool:
        """Regenerate the shape now, then export it.

        Clears queued work. On failure the previous shape, partition and
        type are kept and the error is stored in `last_error`.

        Returns:
            True if the shape was regenerated
        """
        self._ensure_alive()
        self._state = ControllerState.CLEAN
        start_time = time.perf_counter()

        try:
            shape, shape_type = self._build(self._settings)
            partition = None
            if self._settings.export.as_decomposed_hulls:
                partition = _decompose(shape, shape_type)
        except GeometryError as e:
            self._last_error = e
            self._log.log_regenerate_failed(e)
            return False

        self._shape = shape
        self._shape_type = shape_type
        self._partition = partition
        self._last_error = None
        self._log.log_regenerate_complete(
            shape_type=shape_type.name,
            point_count=len(shape),
            hull_count=len(partition) if partition is not None else None,
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )

        self.export()
        return True

    def can_export(self, context: ExecutionContext | None = None) -> bool:
        """Check whether export targets are written in `context`.

        Args:
            context: Execution context; the controller's own if None

        Returns:
            True if the export behavior enables the context
        """
        return self._settings.export.behavior.allows(context or self._context)

    def export(self) -> ExportReport | None:
        """Export the cached shape now.

        Writes every export target if can_export() allows it, then notifies
        observers either way. Clears queued work.

        Returns:
            Report of the written and failed targets, or None if there is
            no shape to export
        """
        self._ensure_alive()
        self._state = ControllerState.CLEAN
        if self._shape is None or self._shape_type is None:
            self._log.log_export_skipped("no shape generated")
            return None

        export_settings = self._settings.export
        try:
            partition = self.decomposed if export_settings.as_decomposed_hulls else self._partition
        except GeometryError as e:
            self._last_error = e
            self._log.log_regenerate_failed(e)
            return None

        report = ExportReport(can_export=self.can_export())
        if report.can_export:
            payload = partition if export_settings.as_decomposed_hulls else self._shape
            for target in export_settings.targets:
                try:
                    sink = self._registry.resolve(target)
                    sink.receive(payload, self._shape_type)
                except ExportTargetUnresolvedError as e:
                    report.errors.append(e)
                    self._log.log_export_target_error(target, e)
                except OSError as e:
                    error = ExportWriteError(target, str(e))
                    report.errors.append(error)
                    self._log.log_export_target_error(target, error)
                else:
                    report.targets_written.append(target)
            self._log.log_export(
                targets_written=len(report.targets_written),
                targets_failed=len(report.errors),
                as_hulls=export_settings.as_decomposed_hulls,
            )
        else:
            self._log.log_export_skipped(f"export disabled in {self._context.value} context")

        for observer in list(self._observers):
            observer(self._shape, partition, self._shape_type)

        self._last_report = report
        if export_settings.auto_dispose and self._context is ExecutionContext.RUNTIME:
            self.dispose()
        return report

    def dispose(self) -> None:
        """Release cached results and observers. The controller stops working."""
        self._disposed = True
        self._state = ControllerState.CLEAN
        self._shape = None
        self._shape_type = None
        self._partition = None
        self._observers.clear()

    def _ensure_alive(self) -> None:
        if self._disposed:
            raise RuntimeError("ShapeController has been disposed")

    def _build(self, settings: ShapeSettings) -> tuple[Shape, ShapeType]:
        """Run the generation pipeline for `settings`."""
        transform = settings.offset.to_transform()
        arc = settings.arc

        if settings.vertices_count == SPOKES_VERTICES_COUNT:
            spokes = create_shape(
                SPOKES_VERTICES_COUNT, settings.sizes, transform, arc.start, arc.end, False
            )
            return spokes, ShapeType.MULTILINE

        has_ring = settings.ring_ratio != 1.0
        central = (
            not arc.is_full_circle
            and settings.closing_method is ClosingMethod.SLICE
            and not has_ring
        )
        base = create_shape(
            settings.vertices_count,
            settings.sizes,
            None,
            arc.start,
            arc.end,
            central,
            closing_method=settings.closing_method,
            circle_detail=settings.geometry.circle_detail,
        )

        if settings.corner_size > 0:
            base = self._round_corners(base, settings, central)

        if settings.ring_ratio == 0.0:
            shape = self._outline(base, settings)
            shape_type = ShapeType.POLYLINE
        elif has_ring:
            shape = add_ring(
                base,
                1.0 - settings.ring_ratio,
                ORIGIN,
                close_ring=arc.is_full_circle,
                reverse_ring=True,
            )
            shape_type = ShapeType.POLYGON
        else:
            shape = base
            shape_type = ShapeType.POLYGON

        return shape.transformed(transform), shape_type

    def _round_corners(self, base: Shape, settings: ShapeSettings, central: bool) -> Shape:
        """Round the configured corners of the base shape."""
        vertices = resolve_vertices_count(
            settings.vertices_count, settings.geometry.circle_detail
        )
        detail = resolve_corner_detail(
            settings.corner_detail, vertices, settings.geometry.detail_budget
        )
        return round_corners_at(
            base,
            settings.corner_size,
            detail,
            self._corner_indices(base, settings, vertices, central),
            settings.corner_range.limit_ending_slopes,
        )

    def _corner_indices(
        self, base: Shape, settings: ShapeSettings, vertices: int, central: bool
    ) -> list[int]:
        """Indices of the base points selected by the corner range.

        Points added along a closing arc are not corners. With a partial arc
        and round_arc_ends off, the range counts from the first vertex after
        the arc start, stops before the arc end and does not wrap, so the cut
        corners stay sharp.
        """
        corners = settings.corner_range
        if settings.arc.is_full_circle:
            return corners.indices(len(base))
        if len(base) < 3:
            return []

        center = [len(base) - 1] if central else []
        closing = len(base) - vertices - len(center)
        # The last closing point sits on the arc end
        arc_end = [vertices + closing - 1] if closing > 0 else []

        if settings.round_arc_ends:
            candidates = [*range(vertices), *arc_end, *center]
            return [candidates[i] for i in corners.indices(len(candidates))]

        interior = list(range(1, vertices if arc_end else vertices - 1))
        if not interior:
            return []
        start = corners.start_index % len(interior)
        length = min(corners.resolved_length(len(interior)), len(interior) - start)
        return interior[start : start + length]

    def _outline(self, base: Shape, settings: ShapeSettings) -> Shape:
        """Build the polyline outline used for a ring ratio of 0."""
        points = list(base)
        if not points:
            return base
        if settings.arc.is_full_circle or settings.closing_method is ClosingMethod.CHORD:
            points.append(points[0])
        elif settings.closing_method is ClosingMethod.SLICE:
            points = [ORIGIN, *points, ORIGIN]
        return Shape(tuple(points))


def _decompose(shape: Shape, shape_type: ShapeType) -> ConvexPartition:
    """Decompose filled shapes; lines have no area and no hulls."""
    if shape_type is not ShapeType.POLYGON:
        return ConvexPartition()
    return decompose(shape)
