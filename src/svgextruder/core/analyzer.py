"""Shape analysis for adaptive level of detail.

Computes, per outline:
- Axis-aligned bounding box (linear scan of the outline points)
- Point count
- Curve command count (cubic, quadratic and arc commands feeding it)
- Complexity score, weighting each curve ten times a plain vertex

The analysis is a pure query and is safe to repeat whenever the curve
resolution changes.
"""

from collections.abc import Iterable

from svgextruder.domain import Outline, PathCommand, ShapeAnalysis, Subpath

CURVE_WEIGHT = 10


class ShapeAnalyzer:
    """Scores outline complexity.

    The analyzer is stateless and safe for use in parallel processing.
    """

    def __init__(self, curve_weight: int = CURVE_WEIGHT) -> None:
        """Initialize the analyzer.

        Args:
            curve_weight: Complexity of one curve command relative to a vertex
        """
        self.curve_weight = curve_weight

    def analyze(self, outline: Outline, source_commands: Iterable[PathCommand]) -> ShapeAnalysis:
        """Analyze one outline.

        Args:
            outline: The closed polygon to measure
            source_commands: Commands that produced the outline

        Returns:
            ShapeAnalysis for the outline
        """
        bbox_min, bbox_max = outline.bounding_box()
        point_count = len(outline)
        curve_count = count_curve_commands(source_commands)

        return ShapeAnalysis(
            bounding_box_min=bbox_min,
            bounding_box_max=bbox_max,
            point_count=point_count,
            curve_command_count=curve_count,
            complexity_score=float(point_count + curve_count * self.curve_weight),
        )

    def analyze_subpath(self, subpath: Subpath) -> ShapeAnalysis:
        """Analyze a subpath using its own source commands."""
        return self.analyze(subpath.outline, subpath.commands)


def count_curve_commands(commands: Iterable[PathCommand]) -> int:
    """Count cubic, quadratic and arc commands."""
    return sum(1 for command in commands if command.is_curve)
