"""Unit tests for convex decomposition."""

import pytest
from shapely.geometry import Polygon
from shapely.ops import unary_union

from shapesmith.core.decomposer import decompose
from shapesmith.core.generator import create_shape
from shapesmith.core.ring import add_ring
from shapesmith.domain import ORIGIN, ConvexPartition, Shape
from shapesmith.exceptions import DegenerateGeometryError


def union_area(partition: ConvexPartition) -> float:
    """Area covered by the union of all hulls."""
    return unary_union([Polygon(hull.to_tuples()) for hull in partition]).area


def assert_valid_partition(shape: Shape, partition: ConvexPartition) -> None:
    """Check convexity, coverage and absence of overlaps."""
    assert len(partition) >= 1
    for hull in partition:
        assert hull.is_convex()
    assert union_area(partition) == pytest.approx(shape.area(), rel=1e-6)
    # Overlapping hulls would cover less than the sum of their areas
    assert partition.area() == pytest.approx(shape.area(), rel=1e-6)


class TestConvexInput:
    """Tests for inputs that are already convex."""

    def test_square_returned_unchanged(self) -> None:
        """Test that a convex input is its own partition."""
        square = Shape.from_tuples([(0, 0), (10, 0), (10, 10), (0, 10)])
        partition = decompose(square)
        assert len(partition) == 1
        assert partition[0] == square

    def test_collinear_points_allowed(self) -> None:
        """Test that collinear vertices do not break convexity."""
        shape = Shape.from_tuples([(0, 0), (5, 0), (10, 0), (10, 10), (0, 10)])
        partition = decompose(shape)
        assert len(partition) == 1
        assert partition[0] == shape

    def test_circle(self) -> None:
        """Test that a generated circle is one hull."""
        circle = create_shape(1, [10.0])
        assert decompose(circle)[0] == circle


class TestConcaveInput:
    """Tests for concave inputs."""

    def test_l_shape(self) -> None:
        """Test that an L shape splits into convex pieces covering it."""
        shape = Shape.from_tuples([(0, 0), (10, 0), (10, 5), (5, 5), (5, 10), (0, 10)])
        partition = decompose(shape)
        assert len(partition) == 2
        assert_valid_partition(shape, partition)

    def test_star(self) -> None:
        """Test decomposition of a five-pointed star."""
        star = create_shape(10, [10.0, 4.0])
        partition = decompose(star)
        assert len(partition) >= 2
        assert_valid_partition(star, partition)

    def test_pie_slice(self) -> None:
        """Test a three-quarter pie, which is concave at its center."""
        pie = create_shape(12, [10.0], None, 0.0, 4.71238898038469)
        assert not pie.is_convex()
        assert_valid_partition(pie, decompose(pie))

    def test_filled_ring(self) -> None:
        """Test a ring traced as one outline with a zero-width bridge."""
        diamond = create_shape(4, [10.0])
        ring = add_ring(diamond, 0.5, ORIGIN, True, reverse_ring=True)
        partition = decompose(ring)
        assert_valid_partition(ring, partition)
        assert partition.area() == pytest.approx(150.0)

    def test_clockwise_winding_preserved(self) -> None:
        """Test that pieces keep the winding of a clockwise input."""
        shape = Shape.from_tuples([(0, 0), (0, 10), (5, 10), (5, 5), (10, 5), (10, 0)])
        assert shape.signed_area() < 0

        partition = decompose(shape)
        assert_valid_partition(shape, partition)
        for hull in partition:
            assert hull.signed_area() < 0

    def test_counterclockwise_winding_preserved(self) -> None:
        """Test that pieces of a counter-clockwise input stay counter-clockwise."""
        shape = Shape.from_tuples([(0, 0), (10, 0), (10, 5), (5, 5), (5, 10), (0, 10)])
        for hull in decompose(shape):
            assert hull.signed_area() > 0

    def test_duplicate_points_ignored(self) -> None:
        """Test that repeated vertices are cleaned before clipping."""
        shape = Shape.from_tuples(
            [(0, 0), (10, 0), (10, 0), (10, 5), (5, 5), (5, 10), (0, 10), (0, 0)]
        )
        assert_valid_partition(shape, decompose(shape))

    def test_deterministic(self) -> None:
        """Test that equal inputs give equal partitions."""
        star = create_shape(10, [10.0, 4.0])
        assert decompose(star) == decompose(star)


class TestDegenerateInput:
    """Tests for inputs without a valid partition."""

    def test_too_few_points(self) -> None:
        """Test that lines cannot be decomposed."""
        with pytest.raises(DegenerateGeometryError):
            decompose(Shape.from_tuples([(0, 0), (10, 0)]))

    def test_single_point(self) -> None:
        """Test that a single point cannot be decomposed."""
        with pytest.raises(DegenerateGeometryError):
            decompose(Shape.from_tuples([(3, 4)]))

    def test_collinear_points(self) -> None:
        """Test that zero-area outlines are rejected."""
        with pytest.raises(DegenerateGeometryError):
            decompose(Shape.from_tuples([(0, 0), (5, 0), (10, 0)]))

    def test_bowtie(self) -> None:
        """Test that a self-intersecting outline is rejected."""
        with pytest.raises(DegenerateGeometryError):
            decompose(Shape.from_tuples([(0, 0), (10, 10), (10, 0), (0, 10)]))

    def test_self_intersecting_with_area(self) -> None:
        """Test a self-intersecting outline whose signed area is not zero."""
        shape = Shape.from_tuples([(0, 0), (20, 0), (20, 10), (5, -5), (0, 10)])
        with pytest.raises(DegenerateGeometryError):
            decompose(shape)
