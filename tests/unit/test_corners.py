"""Unit tests for corner rounding."""

import pytest

from shapesmith.core.corners import (
    add_rounded_corners,
    resolve_corner_detail,
    round_corners_at,
)
from shapesmith.core.generator import create_shape
from shapesmith.domain import Point, Shape
from shapesmith.exceptions import InvalidParameterError


@pytest.fixture
def square() -> Shape:
    """Counter-clockwise 10x10 square."""
    return Shape.from_tuples([(0, 0), (10, 0), (10, 10), (0, 10)])


class TestAddRoundedCorners:
    """Tests for add_rounded_corners."""

    def test_zero_size_keeps_shape(self, square: Shape) -> None:
        """Test that a corner size of 0 reproduces the input."""
        assert add_rounded_corners(square, 0.0, 4) == square

    def test_each_corner_replaced_by_detail_points(self, square: Shape) -> None:
        """Test the point count of a fully rounded shape."""
        rounded = add_rounded_corners(square, 2.0, 3)
        assert len(rounded) == 12

    def test_corner_curve_points(self, square: Shape) -> None:
        """Test the curve endpoints and midpoint of the first corner."""
        rounded = add_rounded_corners(square, 2.0, 3)

        # Corner (0, 0) runs from the edge towards (0, 10) to the edge towards (10, 0)
        assert rounded[0].is_close(Point(0.0, 2.0))
        assert rounded[1].is_close(Point(0.5, 0.5))
        assert rounded[2].is_close(Point(2.0, 0.0))

    def test_detail_one_is_curve_midpoint(self, square: Shape) -> None:
        """Test that a single point per corner sits mid-curve."""
        rounded = add_rounded_corners(square, 2.0, 1)
        assert len(rounded) == 4
        assert rounded[0].is_close(Point(0.5, 0.5))

    def test_default_detail_uses_budget(self, square: Shape) -> None:
        """Test that a detail of 0 spreads the budget over the vertices."""
        assert len(add_rounded_corners(square, 2.0, 0)) == 4 * 8
        assert len(add_rounded_corners(square, 2.0, 0, detail_budget=8)) == 4 * 2

    def test_size_clamped_between_rounded_corners(self, square: Shape) -> None:
        """Test that neighbouring corners share each edge."""
        rounded = add_rounded_corners(square, 20.0, 3)

        assert rounded[0].is_close(Point(0.0, 5.0))
        assert rounded[2].is_close(Point(5.0, 0.0))
        # Curves of neighbouring corners meet mid-edge
        assert rounded[2].is_close(rounded[3])

    def test_limited_ending_slopes(self, square: Shape) -> None:
        """Test that a lone corner is limited to half edges by default."""
        rounded = add_rounded_corners(square, 20.0, 3, start_index=0, length=1)

        assert len(rounded) == 6
        assert rounded[0].is_close(Point(0.0, 5.0))
        assert rounded[2].is_close(Point(5.0, 0.0))

    def test_unlimited_ending_slopes(self, square: Shape) -> None:
        """Test that a lone corner can use whole edges."""
        rounded = add_rounded_corners(
            square, 20.0, 3, start_index=0, length=1, limit_ending_slopes=False
        )
        assert rounded[0].is_close(Point(0.0, 10.0))
        assert rounded[2].is_close(Point(10.0, 0.0))

    def test_partial_range(self, square: Shape) -> None:
        """Test that only the selected corners are rounded."""
        rounded = add_rounded_corners(square, 2.0, 3, start_index=1, length=2)

        assert len(rounded) == 2 + 2 * 3
        assert rounded[0] == square[0]
        assert rounded[-1] == square[3]

    def test_negative_start_wraps(self, square: Shape) -> None:
        """Test that a negative start selects corners from the end."""
        rounded = add_rounded_corners(square, 2.0, 3, start_index=-1, length=1)

        assert len(rounded) == 3 + 3
        assert rounded.points[:3] == square.points[:3]
        assert rounded[3].is_close(Point(2.0, 10.0))

    def test_corners_stay_on_edges(self) -> None:
        """Test that curve endpoints lie on the original edges."""
        hexagon = create_shape(6, [10.0])
        rounded = add_rounded_corners(hexagon, 1.0, 4)
        for k in range(6):
            start = rounded[4 * k]
            vertex = hexagon[k]
            assert start.distance_to(vertex) == pytest.approx(1.0)

    def test_short_shapes_unchanged(self) -> None:
        """Test that lines are returned unchanged."""
        line = Shape.from_tuples([(0, 0), (10, 0)])
        assert add_rounded_corners(line, 2.0, 3) == line

    def test_duplicate_vertex_kept(self) -> None:
        """Test that a vertex with a zero-length edge is kept as-is."""
        shape = Shape.from_tuples([(0, 0), (0, 0), (10, 0), (10, 10)])
        rounded = add_rounded_corners(shape, 1.0, 3, start_index=0, length=1)
        assert rounded[0] == Point(0.0, 0.0)
        assert len(rounded) == 4

    def test_negative_size(self, square: Shape) -> None:
        """Test that negative corner sizes are rejected."""
        with pytest.raises(InvalidParameterError) as exc_info:
            add_rounded_corners(square, -1.0, 3)
        assert exc_info.value.parameter == "corner_size"

    def test_negative_detail(self, square: Shape) -> None:
        """Test that negative corner details are rejected."""
        with pytest.raises(InvalidParameterError) as exc_info:
            add_rounded_corners(square, 1.0, -2)
        assert exc_info.value.parameter == "corner_detail"


class TestRoundCornersAt:
    """Tests for round_corners_at."""

    def test_only_listed_corners_rounded(self, square: Shape) -> None:
        """Test that unlisted vertices are kept in place."""
        rounded = round_corners_at(square, 2.0, 3, [0, 2])

        assert len(rounded) == 8
        assert rounded[0].is_close(Point(0.0, 2.0))
        assert rounded[3] == Point(10.0, 0.0)
        assert rounded[4].is_close(Point(10.0, 8.0))
        assert rounded[6].is_close(Point(8.0, 10.0))
        assert rounded[7] == Point(0.0, 10.0)

    def test_indices_wrap(self, square: Shape) -> None:
        """Test that indices past the end wrap around."""
        assert round_corners_at(square, 2.0, 3, [4]) == round_corners_at(square, 2.0, 3, [0])

    def test_no_indices_keeps_shape(self, square: Shape) -> None:
        """Test that an empty selection reproduces the input."""
        assert round_corners_at(square, 2.0, 3, []) == square


class TestResolveCornerDetail:
    """Tests for resolve_corner_detail."""

    def test_explicit_detail(self) -> None:
        """Test that positive details pass through."""
        assert resolve_corner_detail(5, 4) == 5

    def test_default_detail(self) -> None:
        """Test the budget share and its lower bound."""
        assert resolve_corner_detail(0, 4) == 8
        assert resolve_corner_detail(0, 4, 10) == 2
        assert resolve_corner_detail(0, 64) == 1

    def test_negative_detail(self) -> None:
        """Test that negative details are rejected."""
        with pytest.raises(InvalidParameterError):
            resolve_corner_detail(-1, 4)
