"""Basic 2D geometric value types."""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point2D:
    """A point in 2D drawing space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in SVG user units
        y: Y coordinate in SVG user units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "Point2D") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def reflect_through(self, pivot: "Point2D") -> "Point2D":
        """Reflect this point through a pivot (``pivot * 2 - self``)."""
        return Point2D(pivot.x * 2 - self.x, pivot.y * 2 - self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point2D":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])


ORIGIN = Point2D(0.0, 0.0)
