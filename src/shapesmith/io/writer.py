"""File writers for exported shapes.

Shapes are written either as JSON documents or as SVG files. SVG path data
is drawn through fontTools' pen protocol, which already knows how to turn
moveTo/lineTo/closePath calls into compact path commands.
"""

import json
from pathlib import Path
from typing import Any

from fontTools.pens.svgPathPen import SVGPathPen

from shapesmith.domain import ConvexPartition, Shape, ShapeType

ExportPayload = Shape | ConvexPartition

SVG_MARGIN = 1.0


def _format_number(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def draw_shape(pen: SVGPathPen, shape: Shape, shape_type: ShapeType) -> None:
    """Draw a shape with a segment pen.

    Polygons are closed, polylines are left open and multilines are drawn
    as one subpath per consecutive point pair.

    Args:
        pen: Pen to draw into
        shape: Shape to draw
        shape_type: Topology deciding how the points are joined
    """
    points = shape.to_tuples()
    if not points:
        return

    if shape_type is ShapeType.MULTILINE:
        for k in range(0, len(points) - 1, 2):
            pen.moveTo(points[k])
            pen.lineTo(points[k + 1])
            pen.endPath()
        return

    pen.moveTo(points[0])
    for point in points[1:]:
        pen.lineTo(point)
    if shape_type is ShapeType.POLYGON:
        pen.closePath()
    else:
        pen.endPath()


def svg_path_data(payload: ExportPayload, shape_type: ShapeType) -> str:
    """Build SVG path data for a shape or a convex partition."""
    pen = SVGPathPen(None, ntos=_format_number)
    if isinstance(payload, ConvexPartition):
        for hull in payload:
            draw_shape(pen, hull, ShapeType.POLYGON)
    else:
        draw_shape(pen, payload, shape_type)
    return pen.getCommands()


def _bounds(payload: ExportPayload) -> tuple[float, float, float, float]:
    shapes = list(payload) if isinstance(payload, ConvexPartition) else [payload]
    points = [p for shape in shapes for p in shape]
    if not points:
        return (0.0, 0.0, 0.0, 0.0)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs), min(ys), max(xs), max(ys))


def render_svg(payload: ExportPayload, shape_type: ShapeType) -> str:
    """Render a complete SVG document for the payload."""
    min_x, min_y, max_x, max_y = _bounds(payload)
    view_box = " ".join(
        _format_number(v)
        for v in (
            min_x - SVG_MARGIN,
            min_y - SVG_MARGIN,
            max_x - min_x + 2 * SVG_MARGIN,
            max_y - min_y + 2 * SVG_MARGIN,
        )
    )
    filled = shape_type is ShapeType.POLYGON or isinstance(payload, ConvexPartition)
    style = 'fill="black"' if filled else 'fill="none" stroke="black"'
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{view_box}">\n'
        f'  <path d="{svg_path_data(payload, shape_type)}" {style}/>\n'
        "</svg>\n"
    )


def payload_to_dict(payload: ExportPayload, shape_type: ShapeType) -> dict[str, Any]:
    """Serialize a shape or convex partition to a JSON-ready dictionary."""
    data: dict[str, Any] = {"shape_type": shape_type.name.lower()}
    if isinstance(payload, ConvexPartition):
        data["hulls"] = [[list(p) for p in hull.to_tuples()] for hull in payload]
    else:
        data["points"] = [list(p) for p in payload.to_tuples()]
    return data


class FileSink:
    """Writes exported shapes to a file, choosing the format by suffix.

    Example:
        sink = FileSink(Path("hexagon.svg"))
        sink.receive(shape, ShapeType.POLYGON)
    """

    SUFFIXES = (".json", ".svg")

    def __init__(self, path: Path) -> None:
        """Initialize the sink.

        Args:
            path: Output file; its suffix selects JSON or SVG
        """
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def receive(self, payload: ExportPayload, shape_type: ShapeType) -> None:
        """Write the payload, replacing the file's previous content.

        Raises:
            OSError: If the file cannot be written
        """
        if self._path.suffix.lower() == ".svg":
            text = render_svg(payload, shape_type)
        else:
            text = json.dumps(payload_to_dict(payload, shape_type), indent=2) + "\n"
        self._path.write_text(text, encoding="utf-8")
