"""Closed polygon outlines built from flattened subpaths.

This module defines:
- Outline: A closed polygon approximating one subpath
- Subpath: An outline paired with the commands that produced it
- DegradedFlatten: Event recorded when an arc falls back to a straight line
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from svgextruder.domain.commands import PathCommand, command_from_dict
from svgextruder.domain.geometry import Point2D
from svgextruder.exceptions import OutlineError


@dataclass(frozen=True, slots=True)
class Outline:
    """A closed polygon.

    The first point implicitly connects to the last; the closing point is
    never stored twice. Outlines are immutable once built.

    Attributes:
        points: Polygon vertices in drawing order
    """

    points: tuple[Point2D, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))
        if len(set(self.points)) < 3:
            raise OutlineError(
                f"Outline needs at least 3 distinct points, got {len(set(self.points))}"
            )

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point2D]:
        return iter(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Positive for counter-clockwise winding in a y-up frame.
        """
        n = len(self.points)
        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y
        return area / 2.0

    def bounding_box(self) -> tuple[Point2D, Point2D]:
        """Axis-aligned bounding box as (min, max) corners.

        Linear scan over every point, no early exit.
        """
        first = self.points[0]
        min_x = max_x = first.x
        min_y = max_y = first.y
        for p in self.points[1:]:
            if p.x < min_x:
                min_x = p.x
            elif p.x > max_x:
                max_x = p.x
            if p.y < min_y:
                min_y = p.y
            elif p.y > max_y:
                max_y = p.y
        return Point2D(min_x, min_y), Point2D(max_x, max_y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Outline":
        """Deserialize from dictionary."""
        return cls(points=tuple(Point2D.from_dict(p) for p in data["points"]))


@dataclass(frozen=True, slots=True)
class Subpath:
    """An outline and the source commands that fed it.

    Attributes:
        outline: The closed polygon
        commands: Commands from the opening MoveTo up to the closing point
    """

    outline: Outline
    commands: tuple[PathCommand, ...] = field(default=())

    @property
    def curve_command_count(self) -> int:
        return sum(1 for cmd in self.commands if cmd.is_curve)

    def to_dict(self) -> dict[str, Any]:
        return {
            "outline": self.outline.to_dict(),
            "commands": [cmd.to_dict() for cmd in self.commands],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Subpath":
        return cls(
            outline=Outline.from_dict(data["outline"]),
            commands=tuple(command_from_dict(c) for c in data["commands"]),
        )


@dataclass(frozen=True, slots=True)
class DegradedFlatten:
    """An arc could not be constructed and was replaced by a straight line.

    This is an observability event, not an error.

    Attributes:
        reason: Why the arc construction failed
        start: Arc start point
        end: Arc end point
        rx: Requested x radius
        ry: Requested y radius
    """

    reason: str
    start: Point2D
    end: Point2D
    rx: float
    ry: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "reason": self.reason,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "rx": self.rx,
            "ry": self.ry,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DegradedFlatten":
        return cls(
            reason=data["reason"],
            start=Point2D.from_dict(data["start"]),
            end=Point2D.from_dict(data["end"]),
            rx=data["rx"],
            ry=data["ry"],
        )


def outline_from_points(points: Sequence[Point2D]) -> Outline:
    """Build an outline from raw points, dropping repeats.

    Consecutive duplicates and a trailing copy of the first point are
    removed before the invariant check.

    Raises:
        OutlineError: If fewer than 3 distinct points remain
    """
    cleaned: list[Point2D] = []
    for p in points:
        if not cleaned or cleaned[-1] != p:
            cleaned.append(p)
    while len(cleaned) > 1 and cleaned[-1] == cleaned[0]:
        cleaned.pop()
    return Outline(points=tuple(cleaned))
