"""Export target resolution.

Export targets are plain string identifiers. They are resolved only when a
shape is exported, so a controller never keeps a target alive:

- Identifiers registered in an ExportTargetRegistry map to sinks held by
  weak reference
- Otherwise, paths ending in .json or .svg whose directory exists map to a
  FileSink
"""

import weakref
from pathlib import Path
from typing import Protocol

from shapesmith.domain import ShapeType
from shapesmith.exceptions import ExportTargetUnresolvedError
from shapesmith.io.writer import ExportPayload, FileSink


class ExportSink(Protocol):
    """Anything that can receive an exported shape or partition."""

    def receive(self, payload: ExportPayload, shape_type: ShapeType) -> None: ...


class MemorySink:
    """Sink keeping every received payload in memory.

    Useful for consumers living in the same process, such as a renderer or
    a physics body, and for tests.
    """

    def __init__(self) -> None:
        self.received: list[tuple[ExportPayload, ShapeType]] = []

    @property
    def last(self) -> ExportPayload | None:
        return self.received[-1][0] if self.received else None

    def receive(self, payload: ExportPayload, shape_type: ShapeType) -> None:
        self.received.append((payload, shape_type))


class ExportTargetRegistry:
    """Named export sinks, held by weak reference.

    Example:
        registry = ExportTargetRegistry()
        body = MemorySink()
        registry.register("physics/body", body)
        registry.resolve("physics/body").receive(partition, ShapeType.POLYGON)
    """

    def __init__(self) -> None:
        self._sinks: weakref.WeakValueDictionary[str, ExportSink] = weakref.WeakValueDictionary()

    def register(self, identifier: str, sink: ExportSink) -> None:
        """Register a sink under `identifier`, replacing any previous one."""
        self._sinks[identifier] = sink

    def unregister(self, identifier: str) -> None:
        self._sinks.pop(identifier, None)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._sinks

    def resolve(self, target: str) -> ExportSink:
        """Resolve a target identifier to a sink.

        Args:
            target: Registered identifier or output file path

        Returns:
            The sink to write the target with

        Raises:
            ExportTargetUnresolvedError: If the target cannot be resolved
        """
        sink = self._sinks.get(target)
        if sink is not None:
            return sink

        if not target.strip():
            raise ExportTargetUnresolvedError(target, "empty target")

        path = Path(target)
        if path.suffix.lower() not in FileSink.SUFFIXES:
            raise ExportTargetUnresolvedError(
                target, "not a registered target or a .json/.svg file path"
            )
        if not path.parent.is_dir():
            raise ExportTargetUnresolvedError(
                target, f"directory '{path.parent}' does not exist"
            )
        return FileSink(path)
