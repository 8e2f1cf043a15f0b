"""Exception hierarchy for Shapesmith."""


class ShapesmithError(Exception):
    """Base exception for all Shapesmith errors."""

    pass


class GeometryError(ShapesmithError):
    """Errors raised while generating or decomposing shapes."""

    pass


class InvalidParameterError(GeometryError, ValueError):
    """A generation parameter is outside of its valid domain."""

    def __init__(self, parameter: str, reason: str) -> None:
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"Invalid parameter '{parameter}': {reason}")


class InsertionIndexError(InvalidParameterError, IndexError):
    """Insertion index outside of the target point sequence."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__("start", f"index {index} is outside [0, {size}]")


class DegenerateGeometryError(GeometryError):
    """Shape has no usable area or crosses itself."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Degenerate geometry: {reason}")


class ExportError(ShapesmithError):
    """Errors related to writing shapes to export targets."""

    pass


class ExportTargetUnresolvedError(ExportError):
    """An export target could not be resolved at export time."""

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"Export target '{target}' could not be resolved: {reason}")


class ExportWriteError(ExportError):
    """A resolved export target failed while being written."""

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to write export target '{target}': {reason}")
