"""Shape analysis results and detail level settings.

This module defines the values exchanged between the analyzer, the
detail level planner and the extrusion collaborator:
- ShapeAnalysis: Bounding box and complexity of one outline
- DetailSettings: Resolution and extrusion parameters for one detail level
- DetailLevel: The Low/Medium/High/Ultra ladder rungs
- DetailRung: A detail level paired with its settings
"""

import math
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from svgextruder.domain.geometry import Point2D


class DetailLevel(Enum):
    """Named tessellation tiers and their resolution multipliers."""

    LOW = (1, 0.5, "Low Detail")
    MEDIUM = (2, 1.0, "Medium Detail")
    HIGH = (3, 2.0, "High Detail")
    ULTRA = (4, 4.0, "Ultra Detail")

    def __init__(self, rank: int, multiplier: float, display_name: str) -> None:
        self.rank = rank
        self.multiplier = multiplier
        self.display_name = display_name


@dataclass(frozen=True, slots=True)
class ShapeAnalysis:
    """Complexity metrics for one outline.

    Attributes:
        bounding_box_min: Lower-left corner of the axis-aligned bounds
        bounding_box_max: Upper-right corner of the axis-aligned bounds
        point_count: Number of outline vertices
        curve_command_count: Cubic, quadratic and arc commands feeding the outline
        complexity_score: ``point_count + curve_command_count * 10``
    """

    bounding_box_min: Point2D
    bounding_box_max: Point2D
    point_count: int
    curve_command_count: int
    complexity_score: float

    @property
    def size(self) -> Point2D:
        return Point2D(
            self.bounding_box_max.x - self.bounding_box_min.x,
            self.bounding_box_max.y - self.bounding_box_min.y,
        )

    @property
    def diagonal_length(self) -> float:
        size = self.size
        return math.hypot(size.x, size.y)

    @property
    def is_complex(self) -> bool:
        return self.complexity_score > 100

    @property
    def has_many_curves(self) -> bool:
        return self.curve_command_count > 5

    def to_dict(self) -> dict[str, Any]:
        return {
            "bounding_box_min": self.bounding_box_min.to_dict(),
            "bounding_box_max": self.bounding_box_max.to_dict(),
            "point_count": self.point_count,
            "curve_command_count": self.curve_command_count,
            "complexity_score": self.complexity_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShapeAnalysis":
        return cls(
            bounding_box_min=Point2D.from_dict(data["bounding_box_min"]),
            bounding_box_max=Point2D.from_dict(data["bounding_box_max"]),
            point_count=data["point_count"],
            curve_command_count=data["curve_command_count"],
            complexity_score=data["complexity_score"],
        )


@dataclass(frozen=True, slots=True)
class DetailSettings:
    """Concrete tessellation and extrusion parameters.

    Never mutated after creation; each detail level is a fresh value.
    """

    curve_resolution: int
    extrude_depth: float
    bevel_enabled: bool
    bevel_thickness: float
    bevel_size: float
    bevel_segments: int
    depth_steps: int
    bevel_offset: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DetailSettings":
        return cls(**data)


@dataclass(frozen=True, slots=True)
class DetailRung:
    """One rung of a progressive detail ladder."""

    level: DetailLevel
    settings: DetailSettings

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level.name, "settings": self.settings.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DetailRung":
        return cls(
            level=DetailLevel[data["level"]],
            settings=DetailSettings.from_dict(data["settings"]),
        )
