"""Curve flattening for path commands.

Converts cubic and quadratic Bezier segments and elliptical arcs into line
segment approximations at a requested resolution.

Flattening is a pure function of its inputs: identical commands, start
points and resolutions always give identical point sequences, which keeps
detail level ladders reproducible.
"""

from collections.abc import Callable

import structlog

from svgextruder.core._arc import ArcConstructionError, solve_center_arc
from svgextruder.core._bezier import cubic_point, quadratic_point, sample_parameters
from svgextruder.domain import (
    ArcTo,
    CubicCurveTo,
    CurveCommand,
    DegradedFlatten,
    Point2D,
    QuadraticCurveTo,
)
from svgextruder.exceptions import InvalidResolutionError

logger = structlog.get_logger(__name__)

DegradedCallback = Callable[[DegradedFlatten], None]


class CurveFlattener:
    """Approximates curved commands with line segments.

    The flattener is stateless apart from the optional callback that
    receives ``DegradedFlatten`` events.

    Example:
        events = []
        flattener = CurveFlattener(on_degraded=events.append)
        points = flattener.flatten(command, start=Point2D(0, 0), resolution=64)
    """

    def __init__(self, on_degraded: DegradedCallback | None = None) -> None:
        """Initialize the flattener.

        Args:
            on_degraded: Called once for every arc that falls back to a line
        """
        self._on_degraded = on_degraded

    def flatten(self, command: CurveCommand, start: Point2D, resolution: int) -> list[Point2D]:
        """Flatten one curved command.

        Args:
            command: Cubic, quadratic or arc command (absolute coordinates)
            start: Current point where the curve begins
            resolution: Number of uniform steps along the curve

        Returns:
            Points after ``start``, the last being exactly ``command.end``

        Raises:
            InvalidResolutionError: If resolution is below 1
            TypeError: If the command is not a curve
        """
        if resolution < 1:
            raise InvalidResolutionError(resolution)

        if isinstance(command, CubicCurveTo):
            points = [
                cubic_point(start, command.c1, command.c2, command.end, t)
                for t in sample_parameters(resolution)
            ]
        elif isinstance(command, QuadraticCurveTo):
            points = [
                quadratic_point(start, command.c, command.end, t)
                for t in sample_parameters(resolution)
            ]
        elif isinstance(command, ArcTo):
            return self._flatten_arc(command, start, resolution)
        else:
            raise TypeError(f"Cannot flatten {type(command).__name__}")

        points.append(command.end)
        return points

    def _flatten_arc(self, arc: ArcTo, start: Point2D, resolution: int) -> list[Point2D]:
        try:
            center_arc = solve_center_arc(start, arc)
        except ArcConstructionError as e:
            event = DegradedFlatten(reason=str(e), start=start, end=arc.end, rx=arc.rx, ry=arc.ry)
            logger.warning(
                "Arc flattened as straight line",
                reason=event.reason,
                start=start.to_tuple(),
                end=arc.end.to_tuple(),
                rx=arc.rx,
                ry=arc.ry,
            )
            if self._on_degraded is not None:
                self._on_degraded(event)
            return [arc.end]

        points = [center_arc.point_at(t) for t in sample_parameters(resolution)]
        points.append(arc.end)
        return points


def flatten_curve(
    command: CurveCommand,
    start: Point2D,
    resolution: int,
    on_degraded: DegradedCallback | None = None,
) -> list[Point2D]:
    """Flatten a curved command with a one-off flattener."""
    return CurveFlattener(on_degraded=on_degraded).flatten(command, start, resolution)
