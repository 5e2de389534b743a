"""Logging utilities for svgextruder."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from svgextruder.domain import DegradedFlatten, ShapeAnalysis


@dataclass
class ProcessingStats:
    """Statistics from a processing run."""

    processed_count: int = 0
    error_count: int = 0
    outline_count: int = 0
    degraded_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    path_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_path_time_ms(self) -> float | None:
        """Average per-path processing time, None when nothing was timed."""
        if not self.path_timings_ms:
            return None
        return sum(self.path_timings_ms) / len(self.path_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, only errors reach the console

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Replace handlers installed by an earlier call
    for handler in list(root_logger.handlers):
        if getattr(handler, "svgextruder_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler.svgextruder_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.svgextruder_handler = True  # type: ignore[attr-defined]
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

    logger = structlog.get_logger("svgextruder")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking path processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_path_start(self, path_id: str) -> None:
        """Log start of path processing."""
        self._logger.debug("Processing path", path=path_id)

    def log_path_complete(self, path_id: str, outlines: int, duration_ms: float) -> None:
        """Log successful path processing."""
        self._logger.info(
            "Path processed",
            path=path_id,
            outlines=outlines,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.outline_count += outlines
        self._stats.path_timings_ms.append(duration_ms)

    def log_path_error(self, path_id: str, error: str, source: str | None = None) -> None:
        """Log a path that failed to parse or build."""
        self._logger.error(
            "Path processing failed",
            path=path_id,
            error=error,
            source=source,
        )
        self._stats.error_count += 1
        self._stats.errors.append((path_id, error))

    def log_degraded(self, path_id: str, event: DegradedFlatten) -> None:
        """Log an arc that was flattened as a straight line."""
        self._logger.warning(
            "Degraded flatten",
            path=path_id,
            reason=event.reason,
            start=event.start.to_tuple(),
            end=event.end.to_tuple(),
        )
        self._stats.degraded_count += 1

    def log_outline_analysis(self, path_id: str, index: int, analysis: ShapeAnalysis) -> None:
        """Log per-outline complexity."""
        self._logger.debug(
            "Outline analysis",
            path=path_id,
            outline=index,
            points=analysis.point_count,
            curves=analysis.curve_command_count,
            complexity=analysis.complexity_score,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
