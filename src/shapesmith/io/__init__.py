"""Export layer for shapesmith.

This module writes generated shapes to export targets. Targets are string
identifiers resolved at export time, either to in-process sinks registered
by weak reference or to JSON/SVG files.

Key classes:
- ExportTargetRegistry: Resolve target identifiers to sinks
- MemorySink: Keep exported payloads in memory
- FileSink: Write payloads to .json or .svg files
"""

from shapesmith.io.targets import ExportSink, ExportTargetRegistry, MemorySink
from shapesmith.io.writer import ExportPayload, FileSink, render_svg, svg_path_data

__all__ = [
    "ExportPayload",
    "ExportSink",
    "ExportTargetRegistry",
    "FileSink",
    "MemorySink",
    "render_svg",
    "svg_path_data",
]
