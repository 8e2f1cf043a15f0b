"""Logging utilities for Shapesmith."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class GenerationStats:
    """Statistics of a controller's generation and export cycles."""

    regenerations: int = 0
    failed_regenerations: int = 0
    exports: int = 0
    export_errors: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    generation_timings_ms: list[float] = field(default_factory=list)

    @property
    def avg_generation_time_ms(self) -> float | None:
        """Average time per successful regeneration."""
        if not self.generation_timings_ms:
            return None
        return sum(self.generation_timings_ms) / len(self.generation_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging on top of the standard library.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("shapesmith")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class GenerationLogger:
    """Logger for tracking generation and export cycles and their statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("shapesmith")
        self._stats = GenerationStats()

    def log_regenerate_queued(self, reason: str) -> None:
        self._logger.debug("Regeneration queued", reason=reason)

    def log_regenerate_complete(
        self,
        shape_type: str,
        point_count: int,
        hull_count: int | None,
        duration_ms: float,
    ) -> None:
        """Log a successful regeneration."""
        self._logger.info(
            "Shape regenerated",
            shape_type=shape_type,
            points=point_count,
            hulls=hull_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.regenerations += 1
        self._stats.generation_timings_ms.append(duration_ms)

    def log_regenerate_failed(self, error: Exception) -> None:
        """Log a regeneration that kept the previous shape."""
        self._logger.error(
            "Shape regeneration failed, keeping previous shape",
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.failed_regenerations += 1
        self._stats.errors.append(("regenerate", str(error)))

    def log_export(self, targets_written: int, targets_failed: int, as_hulls: bool) -> None:
        """Log a completed export step."""
        self._logger.info(
            "Shape exported",
            written=targets_written,
            failed=targets_failed,
            as_hulls=as_hulls,
        )
        self._stats.exports += 1

    def log_export_skipped(self, reason: str) -> None:
        self._logger.debug("Export skipped", reason=reason)

    def log_export_target_error(self, target: str, error: Exception) -> None:
        """Log a target that could not be written."""
        self._logger.warning(
            "Export target failed",
            target=target,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.export_errors += 1
        self._stats.errors.append((target, str(error)))

    @property
    def stats(self) -> GenerationStats:
        """Get current generation statistics."""
        return self._stats
