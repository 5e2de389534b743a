"""Outline building from path commands.

Accumulates commands into closed polygon outlines, one per subpath:
- MoveTo starts a new subpath
- ClosePath finishes the current one
- Curves are flattened at the single resolution given to the call
- Open subpaths are closed back to their start point

Subpaths that degenerate below three distinct points are dropped with a
warning. Whether an empty result is an error is up to the caller; use
``build_required`` when at least one outline is needed.
"""

from collections.abc import Sequence

import structlog

from svgextruder.core.flattener import CurveFlattener, DegradedCallback
from svgextruder.domain import (
    ClosePath,
    LineTo,
    MoveTo,
    Outline,
    PathCommand,
    Point2D,
    Subpath,
    outline_from_points,
)
from svgextruder.exceptions import NoValidOutlinesError, OutlineError

logger = structlog.get_logger(__name__)


class _SubpathAccumulator:
    """Points and commands collected for one subpath."""

    def __init__(self, start: Point2D) -> None:
        self.start = start
        self.points: list[Point2D] = [start]
        self.commands: list[PathCommand] = [MoveTo(start)]

    @property
    def has_drawing(self) -> bool:
        return len(self.commands) > 1


class OutlineBuilder:
    """Builds closed outlines from absolute path commands.

    Example:
        builder = OutlineBuilder()
        outlines = builder.build(parse_path("M0,0 L10,0 L10,10"), resolution=64)
    """

    def __init__(
        self,
        flattener: CurveFlattener | None = None,
        on_degraded: DegradedCallback | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            flattener: Curve flattener to use (created if None)
            on_degraded: Forwarded to the created flattener; ignored when a
                flattener is supplied
        """
        self._flattener = flattener or CurveFlattener(on_degraded=on_degraded)

    def build(self, commands: Sequence[PathCommand], resolution: int) -> list[Outline]:
        """Build outlines, one per surviving subpath."""
        return [subpath.outline for subpath in self.build_subpaths(commands, resolution)]

    def build_required(self, commands: Sequence[PathCommand], resolution: int) -> list[Subpath]:
        """Build subpaths and require at least one.

        Raises:
            NoValidOutlinesError: If every subpath degenerated
        """
        subpaths = self.build_subpaths(commands, resolution)
        if not subpaths:
            raise NoValidOutlinesError()
        return subpaths

    def build_subpaths(self, commands: Sequence[PathCommand], resolution: int) -> list[Subpath]:
        """Build outlines paired with the commands that produced them.

        Args:
            commands: Absolute commands, as produced by the parser
            resolution: Steps per curved command

        Returns:
            Subpaths in source order
        """
        subpaths: list[Subpath] = []
        current: _SubpathAccumulator | None = None
        pen = Point2D(0.0, 0.0)

        for command in commands:
            if isinstance(command, MoveTo):
                self._finalize(current, subpaths)
                current = _SubpathAccumulator(command.point)
                pen = command.point
                continue

            if isinstance(command, ClosePath):
                if current is not None:
                    self._finalize(current, subpaths)
                    pen = current.start
                current = None
                continue

            # Drawing after Z without a MoveTo reopens at the closed start
            if current is None:
                current = _SubpathAccumulator(pen)

            if isinstance(command, LineTo):
                current.points.append(command.point)
            else:
                current.points.extend(self._flattener.flatten(command, pen, resolution))
            current.commands.append(command)
            pen = command.end

        self._finalize(current, subpaths)
        return subpaths

    def _finalize(self, acc: _SubpathAccumulator | None, subpaths: list[Subpath]) -> None:
        """Close an accumulated subpath and keep it if it is a polygon."""
        if acc is None:
            return

        try:
            outline = outline_from_points(acc.points)
        except OutlineError:
            # A lone MoveTo is a position change, not a shape
            if acc.has_drawing:
                logger.warning(
                    "Dropped degenerate subpath",
                    start=acc.start.to_tuple(),
                    points=len(acc.points),
                )
            return

        subpaths.append(Subpath(outline=outline, commands=tuple(acc.commands)))


def build_outlines(commands: Sequence[PathCommand], resolution: int) -> list[Outline]:
    """Build outlines with a default builder."""
    return OutlineBuilder().build(commands, resolution)
