"""End-to-end tests driving a controller through several ticks."""

import json
import math
from pathlib import Path

import pytest
from shapely.geometry import Polygon
from shapely.ops import unary_union

from shapesmith.config import ExportConfig, ShapeSettings
from shapesmith.core import ControllerState, ShapeController
from shapesmith.domain import ConvexPartition, ExportBehavior, Shape, ShapeType
from shapesmith.io import ExportTargetRegistry, MemorySink


class TestControllerPipeline:
    """Test a controller feeding a renderer, a physics body and files."""

    def setup_method(self) -> None:
        """Set up sinks standing in for in-process consumers."""
        self.registry = ExportTargetRegistry()
        self.renderer = MemorySink()
        self.body = MemorySink()
        self.registry.register("renderer", self.renderer)
        self.registry.register("body", self.body)

    def test_ticks(self, tmp_path: Path) -> None:
        """Test a sequence of edits, one flush per tick."""
        json_path = tmp_path / "shape.json"
        svg_path = tmp_path / "shape.svg"
        notifications: list[ShapeType] = []

        controller = ShapeController(
            ShapeSettings(
                vertices_count=10,
                sizes=[10.0, 4.0],
                export=ExportConfig(
                    behavior=ExportBehavior.RUNTIME,
                    targets=["renderer", str(json_path), str(svg_path)],
                ),
            ),
            registry=self.registry,
        )
        controller.connect(lambda shape, hulls, shape_type: notifications.append(shape_type))

        # Tick 1: initial generation
        assert controller.flush()
        star = controller.shape
        assert isinstance(self.renderer.last, Shape)
        assert json.loads(json_path.read_text(encoding="utf-8"))["shape_type"] == "polygon"
        assert svg_path.read_text(encoding="utf-8").startswith("<svg")

        # Tick 2: several edits coalesce
        controller.configure(corner_size=1.0, corner_detail=3)
        controller.configure(offset_rotation_degrees=18.0)
        assert controller.flush()
        assert controller.shape is not star
        assert len(controller.shape) == 30
        assert len(notifications) == 2

        # Tick 3: nothing to do
        assert not controller.flush()

        # Tick 4: switch the files to convex hulls, without regenerating
        controller.configure(
            export={"targets": ["body", str(json_path)], "as_decomposed_hulls": True}
        )
        assert controller.state is ControllerState.EXPORT_PENDING
        assert controller.flush()
        assert isinstance(self.body.last, ConvexPartition)
        assert "hulls" in json.loads(json_path.read_text(encoding="utf-8"))
        assert controller.stats.regenerations == 2
        assert len(notifications) == 3

        # Tick 5: a bad edit keeps the rounded star
        rounded = controller.shape
        controller.configure(sizes=[])
        controller.flush()
        assert controller.shape is rounded
        assert controller.last_error is not None
        assert len(notifications) == 3

    def test_partition_covers_rounded_star(self) -> None:
        """Test that hulls cover a rounded star exactly."""
        controller = ShapeController(
            ShapeSettings(
                vertices_count=10,
                sizes=[10.0, 4.0],
                corner_size=1.5,
                corner_detail=4,
                export=ExportConfig(
                    behavior=ExportBehavior.RUNTIME,
                    targets=["body"],
                    as_decomposed_hulls=True,
                ),
            ),
            registry=self.registry,
        )
        controller.flush()

        shape = controller.shape
        partition = self.body.last
        assert shape is not None
        assert isinstance(partition, ConvexPartition)
        for hull in partition:
            assert hull.is_convex()
        union = unary_union([Polygon(hull.to_tuples()) for hull in partition])
        assert union.area == pytest.approx(shape.area(), rel=1e-6)
        assert union.symmetric_difference(Polygon(shape.to_tuples())).area < 1e-6

    def test_ring_hulls(self) -> None:
        """Test that a filled ring decomposes into hulls covering the ring."""
        controller = ShapeController(
            ShapeSettings(
                vertices_count=4,
                ring_ratio=0.5,
                export=ExportConfig(as_decomposed_hulls=True),
            ),
        )
        controller.flush()

        partition = controller.decomposed
        assert partition is not None
        union = unary_union([Polygon(hull.to_tuples()) for hull in partition])
        assert union.area == pytest.approx(150.0)
        # The hole stays uncovered
        assert not union.contains(Polygon([(1, 0), (0, 1), (-1, 0), (0, -1)]))

    def test_spokes_pipeline(self) -> None:
        """Test that spokes reach consumers as a multiline."""
        controller = ShapeController(
            ShapeSettings(
                vertices_count=2,
                sizes=[5.0, 10.0, 15.0],
                arc_angle=math.pi,
                export=ExportConfig(behavior=ExportBehavior.RUNTIME, targets=["renderer"]),
            ),
            registry=self.registry,
        )
        controller.flush()

        assert self.renderer.received[0][1] is ShapeType.MULTILINE
        assert len(self.renderer.last) == 6
