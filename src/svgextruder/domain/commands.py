"""Typed drawing commands resolved from SVG path data.

Every command stores absolute coordinates. Resolving relative (lowercase)
commands is the parser's job, so nothing downstream ever sees a relative
coordinate.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, TypeAlias

from svgextruder.domain.geometry import Point2D


class CommandKind(str, Enum):
    """Kind tag for path commands."""

    MOVE_TO = "move_to"
    LINE_TO = "line_to"
    CUBIC = "cubic"
    QUADRATIC = "quadratic"
    ARC = "arc"
    CLOSE = "close"


CURVE_KINDS = frozenset({CommandKind.CUBIC, CommandKind.QUADRATIC, CommandKind.ARC})


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new subpath at ``point``."""

    point: Point2D
    kind: ClassVar[CommandKind] = CommandKind.MOVE_TO

    @property
    def end(self) -> Point2D:
        return self.point

    @property
    def is_curve(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "point": self.point.to_dict()}


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight segment from the current point to ``point``."""

    point: Point2D
    kind: ClassVar[CommandKind] = CommandKind.LINE_TO

    @property
    def end(self) -> Point2D:
        return self.point

    @property
    def is_curve(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "point": self.point.to_dict()}


@dataclass(frozen=True, slots=True)
class CubicCurveTo:
    """Cubic Bezier segment.

    Attributes:
        c1: First control point
        c2: Second control point
        end: End point
    """

    c1: Point2D
    c2: Point2D
    end: Point2D
    kind: ClassVar[CommandKind] = CommandKind.CUBIC

    @property
    def is_curve(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "c1": self.c1.to_dict(),
            "c2": self.c2.to_dict(),
            "end": self.end.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class QuadraticCurveTo:
    """Quadratic Bezier segment with a single control point ``c``."""

    c: Point2D
    end: Point2D
    kind: ClassVar[CommandKind] = CommandKind.QUADRATIC

    @property
    def is_curve(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "c": self.c.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True, slots=True)
class ArcTo:
    """Elliptical arc segment in SVG endpoint parameterization.

    Attributes:
        rx: X radius (non-negative)
        ry: Y radius (non-negative)
        rotation_rad: Rotation of the ellipse x-axis, in radians
        large_arc: Choose the arc spanning more than 180 degrees
        sweep: Draw in the positive-angle direction
        end: End point
    """

    rx: float
    ry: float
    rotation_rad: float
    large_arc: bool
    sweep: bool
    end: Point2D
    kind: ClassVar[CommandKind] = CommandKind.ARC

    @property
    def is_curve(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "rx": self.rx,
            "ry": self.ry,
            "rotation_rad": self.rotation_rad,
            "large_arc": self.large_arc,
            "sweep": self.sweep,
            "end": self.end.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current subpath back to its start point."""

    kind: ClassVar[CommandKind] = CommandKind.CLOSE

    @property
    def is_curve(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value}


PathCommand: TypeAlias = MoveTo | LineTo | CubicCurveTo | QuadraticCurveTo | ArcTo | ClosePath
CurveCommand: TypeAlias = CubicCurveTo | QuadraticCurveTo | ArcTo


def command_from_dict(data: dict[str, Any]) -> PathCommand:
    """Rebuild any path command from its ``to_dict()`` form.

    Raises:
        ValueError: If the kind tag is unknown
    """
    kind = CommandKind(data["kind"])
    if kind is CommandKind.MOVE_TO:
        return MoveTo(Point2D.from_dict(data["point"]))
    if kind is CommandKind.LINE_TO:
        return LineTo(Point2D.from_dict(data["point"]))
    if kind is CommandKind.CUBIC:
        return CubicCurveTo(
            c1=Point2D.from_dict(data["c1"]),
            c2=Point2D.from_dict(data["c2"]),
            end=Point2D.from_dict(data["end"]),
        )
    if kind is CommandKind.QUADRATIC:
        return QuadraticCurveTo(
            c=Point2D.from_dict(data["c"]),
            end=Point2D.from_dict(data["end"]),
        )
    if kind is CommandKind.ARC:
        return ArcTo(
            rx=data["rx"],
            ry=data["ry"],
            rotation_rad=data["rotation_rad"],
            large_arc=data["large_arc"],
            sweep=data["sweep"],
            end=Point2D.from_dict(data["end"]),
        )
    return ClosePath()
